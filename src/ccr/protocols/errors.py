"""Shared error types for the upstream protocol layer."""


class ProxyError(Exception):
    """Base error for all proxy-layer failures."""


class ProviderNotFoundError(ProxyError):
    """Requested provider is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Provider {name} not found")


class UpstreamHTTPError(ProxyError):
    """The provider answered with a non-success status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(
            f"HTTP error! status: {status_code}" + (f": {detail}" if detail else "")
        )


class MalformedEventError(ProxyError):
    """An SSE ``data`` payload could not be parsed as JSON."""

    def __init__(self, payload: str) -> None:
        self.payload = payload
        super().__init__(f"Malformed event payload: {payload[:200]}")
