"""Route selection — which provider serves a request, and under what model.

Routing policy lives outside the translation pipeline; the pipeline only
consumes its output, a :class:`Route`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from ccr.protocols.registry import DEFAULT_PROVIDER

if TYPE_CHECKING:
    from ccr.config.models import ProxySettings


@dataclass(frozen=True)
class Route:
    """Target provider name and an optional model override."""

    provider: str = DEFAULT_PROVIDER
    model: str | None = None


@runtime_checkable
class Router(Protocol):
    """Chooses a :class:`Route` for an inbound request body."""

    def route(self, body: Any) -> Route: ...


class StaticRouter:
    """Sends every request to the same provider.

    Built from ``Router.default`` (``"provider,model"``) when present,
    otherwise the ``default`` provider with the model rewritten to
    ``OPENAI_MODEL`` if that key is set.
    """

    def __init__(self, route: Route | None = None) -> None:
        self._route = route or Route()

    @classmethod
    def from_settings(cls, settings: ProxySettings) -> StaticRouter:
        if settings.router is not None and settings.router.default:
            provider, _, model = settings.router.default.partition(",")
            return cls(Route(provider=provider.strip(), model=model.strip() or None))
        return cls(Route(model=settings.openai_model))

    def route(self, body: Any) -> Route:
        return self._route
