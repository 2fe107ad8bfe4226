"""ResponseWriter protocol — hands the upstream result back to the caller."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Protocol, runtime_checkable

Completion = AsyncIterator[Any] | dict[str, Any]


@runtime_checkable
class ResponseWriter(Protocol):
    """Serializes a completion for the inbound caller.

    Called exactly once per request, with either the lazy event stream of a
    streaming call (possibly a single synthesized error chunk) or the parsed
    body of a non-streaming call.
    """

    async def write(self, completion: Completion, model: str | None, original: Any) -> Any: ...


def response_headers(stream: bool) -> dict[str, str]:
    """Headers for the inbound response, fixed before the upstream call is made."""
    headers = {"Cache-Control": "no-cache", "Connection": "keep-alive"}
    if stream:
        headers["Content-Type"] = "text/event-stream"
    return headers
