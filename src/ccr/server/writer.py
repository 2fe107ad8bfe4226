"""SSEPassthroughWriter — returns OpenAI completions to the caller unchanged."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from fastapi.responses import JSONResponse, StreamingResponse

from ccr.runtime.writer import response_headers

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from starlette.responses import Response

    from ccr.runtime.writer import Completion


class SSEPassthroughWriter:
    """Writes event streams as ``data: <json>`` lines and whole bodies as JSON.

    Satisfies the :class:`~ccr.runtime.writer.ResponseWriter` protocol.
    """

    async def write(self, completion: Completion, model: str | None, original: Any) -> Response:
        stream = bool(original.get("stream")) if isinstance(original, dict) else False
        headers = response_headers(stream)

        if isinstance(completion, dict):
            return JSONResponse(completion, headers=headers)

        return StreamingResponse(
            self._encode(completion),
            media_type="text/event-stream",
            headers=headers,
        )

    @staticmethod
    async def _encode(events: AsyncIterator[Any]) -> AsyncIterator[bytes]:
        async for event in events:
            yield f"data: {json.dumps(event, ensure_ascii=False)}\n\n".encode()
        yield b"data: [DONE]\n\n"
