"""ProxyContext — process-wide state built once at startup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ccr.protocols.client_cache import ProviderClientCache, TransportOptions
from ccr.protocols.registry import ProviderRegistry
from ccr.runtime.routing import Router, StaticRouter

if TYPE_CHECKING:
    from ccr.config.models import ProxySettings
    from ccr.runtime.writer import ResponseWriter


@dataclass
class ProxyContext:
    """Everything a request handler needs that outlives a single request.

    The client cache is the only member mutated after construction.
    """

    registry: ProviderRegistry
    clients: ProviderClientCache
    router: Router
    writer: ResponseWriter

    @classmethod
    def from_settings(
        cls,
        settings: ProxySettings,
        *,
        writer: ResponseWriter,
        router: Router | None = None,
    ) -> ProxyContext:
        registry = ProviderRegistry.from_settings(settings)
        transport = TransportOptions(proxy_url=settings.proxy_url, timeout=settings.timeout_seconds)
        return cls(
            registry=registry,
            clients=ProviderClientCache(registry, transport=transport),
            router=router or StaticRouter.from_settings(settings),
            writer=writer,
        )

    async def aclose(self) -> None:
        """Release pooled upstream connections."""
        await self.clients.aclose()
