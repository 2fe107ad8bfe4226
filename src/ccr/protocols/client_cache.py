"""ProviderClientCache — bounded, expiring pool of per-provider HTTP clients.

Each provider gets one :class:`httpx.AsyncClient` bound to its base URL and
credential so connections are reused across requests. Entries expire two
hours after insertion and the least recently used entry is evicted once the
cache holds ten clients. Expiry is evaluated lazily on lookup.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable

    from ccr.core.interface.config import ProviderConfig
    from ccr.protocols.registry import ProviderRegistry

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10
DEFAULT_TTL_SECONDS = 2 * 60 * 60
DEFAULT_TIMEOUT_SECONDS = 600.0


@dataclass(frozen=True)
class TransportOptions:
    """Transport settings shared by every provider client."""

    proxy_url: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"timeout": httpx.Timeout(self.timeout)}
        if self.proxy_url:
            kwargs["proxy"] = self.proxy_url
        return kwargs


@dataclass
class CachedClient:
    """A pooled client, the monotonic time it was inserted, and its open leases."""

    provider_name: str
    handle: httpx.AsyncClient
    inserted_at: float
    leases: int = 0


class ProviderClientCache:
    """Resolves a provider name to a pooled :class:`httpx.AsyncClient`.

    Expired and evicted clients are retired rather than dropped. A retired
    client is closed once it holds no leases, on the next :meth:`acquire`,
    :meth:`release` or :meth:`aclose`, so a stream still reading from it is
    never cut off.

    Cold lookups are not deduplicated: two concurrent requests for the same
    uncached provider may both build a client, and the last insert wins.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        *,
        transport: TransportOptions | None = None,
        capacity: int = DEFAULT_CAPACITY,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._registry = registry
        self._transport = transport or TransportOptions()
        self._capacity = capacity
        self._ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, CachedClient] = OrderedDict()
        self._retired: list[CachedClient] = []
        self._lock = threading.Lock()

    @property
    def transport(self) -> TransportOptions:
        return self._transport

    def get(self, provider_name: str) -> httpx.AsyncClient:
        """Return the live client for *provider_name*, building one if needed.

        Raises:
            ProviderNotFoundError: If the registry has no such provider.
        """
        return self._lookup(provider_name, lease=False)

    async def acquire(self, provider_name: str) -> httpx.AsyncClient:
        """Like :meth:`get`, but hold a lease until :meth:`release` is awaited."""
        handle = self._lookup(provider_name, lease=True)
        await self._close_idle_retired()
        return handle

    async def release(self, handle: httpx.AsyncClient) -> None:
        """Give back a lease taken with :meth:`acquire`."""
        with self._lock:
            for entry in (*self._entries.values(), *self._retired):
                if entry.handle is handle:
                    entry.leases = max(entry.leases - 1, 0)
                    break
        await self._close_idle_retired()

    def __contains__(self, provider_name: object) -> bool:
        with self._lock:
            entry = self._entries.get(provider_name)  # type: ignore[arg-type]
            return entry is not None and self._clock() - entry.inserted_at < self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def aclose(self) -> None:
        """Close every cached and retired client and empty the cache."""
        with self._lock:
            entries = [*self._entries.values(), *self._retired]
            self._entries.clear()
            self._retired.clear()
        for entry in entries:
            await entry.handle.aclose()

    def _lookup(self, provider_name: str, *, lease: bool) -> httpx.AsyncClient:
        provider = self._registry.get(provider_name)

        with self._lock:
            entry = self._entries.get(provider.name)
            if entry is not None:
                if self._clock() - entry.inserted_at < self._ttl:
                    self._entries.move_to_end(provider.name)
                    entry.leases += lease
                    return entry.handle
                logger.debug("Client for provider %s expired", provider.name)
                self._retired.append(self._entries.pop(provider.name))

        handle = self._build(provider)

        with self._lock:
            replaced = self._entries.pop(provider.name, None)
            if replaced is not None:
                self._retired.append(replaced)
            self._entries[provider.name] = CachedClient(
                provider_name=provider.name,
                handle=handle,
                inserted_at=self._clock(),
                leases=int(lease),
            )
            while len(self._entries) > self._capacity:
                evicted, entry = self._entries.popitem(last=False)
                logger.debug("Evicted client for provider %s", evicted)
                self._retired.append(entry)
        return handle

    async def _close_idle_retired(self) -> None:
        with self._lock:
            idle = [entry for entry in self._retired if entry.leases == 0]
            self._retired = [entry for entry in self._retired if entry.leases > 0]
        for entry in idle:
            logger.debug("Closing retired client for provider %s", entry.provider_name)
            await entry.handle.aclose()

    def _build(self, provider: ProviderConfig) -> httpx.AsyncClient:
        logger.debug("Creating client for provider %s at %s", provider.name, provider.api_base_url)
        return httpx.AsyncClient(
            base_url=provider.api_base_url,
            headers={"Authorization": f"Bearer {provider.api_key}"},
            **self._transport.client_kwargs(),
        )
