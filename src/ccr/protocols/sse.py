"""Incremental server-sent-event decoder for streamed chat completions.

Turns the raw byte stream of an upstream response into a lazy sequence of
parsed JSON events. Bytes are decoded with a stateful UTF-8 decoder so a
multi-byte character split across two reads is reassembled, and the last
partial line of each read is held back until its newline arrives.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import TYPE_CHECKING, Any

from ccr.protocols.errors import MalformedEventError

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable

    import httpx

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def event_payload(line: str) -> str | None:
    """Return the JSON text carried by *line*, or ``None`` if it carries no event."""
    text = line.strip()
    if text.startswith(DATA_PREFIX):
        text = text[len(DATA_PREFIX) :].strip()
    if not text or text == DONE_SENTINEL:
        return None
    return text


def parse_event(payload: str) -> Any:
    """Parse one event payload.

    Raises:
        MalformedEventError: If *payload* is not valid JSON.
    """
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise MalformedEventError(payload) from exc


async def iter_sse_events(
    chunks: AsyncIterable[bytes],
    *,
    on_close: Callable[[], Awaitable[None]] | None = None,
) -> AsyncIterator[Any]:
    """Yield parsed events from *chunks* in arrival order.

    *on_close* runs on every exit path: exhaustion, error, or the consumer
    closing the generator early.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""
    try:
        async for chunk in chunks:
            buffer += decoder.decode(chunk)
            *lines, buffer = buffer.split("\n")
            for event in _events(lines):
                yield event

        buffer += decoder.decode(b"", final=True)
        if buffer:
            for event in _events([buffer]):
                yield event
    finally:
        if on_close is not None:
            await on_close()


def iter_response_events(
    response: httpx.Response,
    *,
    after_close: Callable[[], Awaitable[None]] | None = None,
) -> AsyncIterator[Any]:
    """Decode a streaming :class:`httpx.Response`, closing it when done.

    *after_close* runs once the response is closed, whatever the exit path.
    """

    async def close() -> None:
        try:
            await response.aclose()
        finally:
            if after_close is not None:
                await after_close()

    return iter_sse_events(response.aiter_bytes(), on_close=close)


def _events(lines: Iterable[str]) -> Iterable[Any]:
    for line in lines:
        payload = event_payload(line)
        if payload is None:
            continue
        try:
            yield parse_event(payload)
        except MalformedEventError:
            logger.debug("Failed to parse SSE data: %s", payload)
