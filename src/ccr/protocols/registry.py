"""ProviderRegistry — static name-to-provider table built at startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ccr.core.interface.config import ProviderConfig
from ccr.protocols.errors import ProviderNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ccr.config.models import ProxySettings

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "default"


class ProviderRegistry:
    """Maps provider names (and aliases) to :class:`ProviderConfig`.

    Usage::

        registry = ProviderRegistry.from_settings(settings)
        provider = registry.get("openrouter")
    """

    def __init__(self, providers: Iterable[ProviderConfig] = ()) -> None:
        self._providers: dict[str, ProviderConfig] = {}
        for provider in providers:
            self.register(provider)

    @classmethod
    def from_settings(cls, settings: ProxySettings) -> ProviderRegistry:
        """Build the registry from the loaded config file.

        The ``default`` entry is the legacy ``OPENAI_*`` provider when all three
        keys are set, otherwise an alias of the first configured provider.
        """
        registry = cls(settings.providers)

        if settings.openai_api_key and settings.openai_base_url and settings.openai_model:
            registry.register(
                ProviderConfig(
                    name=DEFAULT_PROVIDER,
                    api_base_url=settings.openai_base_url,
                    api_key=settings.openai_api_key,
                    models=frozenset({settings.openai_model}),
                )
            )
        elif settings.providers:
            registry.register(settings.providers[0], alias=DEFAULT_PROVIDER)

        if DEFAULT_PROVIDER not in registry:
            logger.warning("No providers configured; every request will fail")
        return registry

    def register(self, provider: ProviderConfig, *, alias: str | None = None) -> None:
        """Add *provider* under its own name, or under *alias* when given."""
        key = alias or provider.name
        if key in self._providers:
            logger.debug("Replacing provider registered as %s", key)
        self._providers[key] = provider

    def get(self, name: str) -> ProviderConfig:
        """Return the provider registered as *name*."""
        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    def names(self) -> list[str]:
        """Registered names, aliases included, in registration order."""
        return list(self._providers)

    def items(self) -> list[tuple[str, ProviderConfig]]:
        return list(self._providers.items())

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __iter__(self) -> Iterator[ProviderConfig]:
        return iter(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)
