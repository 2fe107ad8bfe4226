"""Upstream provider protocol — registry, pooled clients, SSE decoding."""

from ccr.protocols.client_cache import ProviderClientCache, TransportOptions
from ccr.protocols.errors import (
    MalformedEventError,
    ProviderNotFoundError,
    ProxyError,
    UpstreamHTTPError,
)
from ccr.protocols.registry import DEFAULT_PROVIDER, ProviderRegistry
from ccr.protocols.sse import iter_response_events, iter_sse_events

__all__ = [
    "DEFAULT_PROVIDER",
    "MalformedEventError",
    "ProviderClientCache",
    "ProviderNotFoundError",
    "ProviderRegistry",
    "ProxyError",
    "TransportOptions",
    "UpstreamHTTPError",
    "iter_response_events",
    "iter_sse_events",
]
