"""Synthesized chat completion events."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


def error_chunk(message: str, model: str | None) -> dict[str, Any]:
    """Build a terminal ``chat.completion.chunk`` carrying *message*.

    Same shape as a streamed upstream chunk so the response writer needs no
    special case for failures.
    """
    now = time.time()
    return {
        "id": f"error_{int(now * 1000)}",
        "created": int(now),
        "model": model,
        "object": "chat.completion.chunk",
        "choices": [
            {
                "index": 0,
                "delta": {"content": f"Error: {message}"},
                "finish_reason": "stop",
            }
        ],
    }


async def error_stream(message: str, model: str | None) -> AsyncIterator[dict[str, Any]]:
    """One-element event stream holding :func:`error_chunk`."""
    yield error_chunk(message, model)
