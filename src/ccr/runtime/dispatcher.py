"""RequestDispatcher — runs one inbound request through the proxy pipeline.

Pipeline, strictly in order:
1. **Translate** the Anthropic body into an OpenAI payload (messages,
   tool pairing, cache markers, tools).
2. **Resolve** the routed provider and its pooled client.
3. **Call** ``POST /v1/chat/completions`` upstream; non-2xx is fatal.
4. **Decode** the SSE stream lazily, or parse the whole JSON body.
5. **Write** the result through the context's response writer.

Any failure in steps 1-4 is turned into a single synthesized error chunk, so
the writer is always called exactly once with a well-formed completion.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from ccr.core.interface.models import MessagesRequest
from ccr.core.interface.transpilers.openai import OpenAITranspiler
from ccr.protocols.errors import ProxyError, UpstreamHTTPError
from ccr.protocols.sse import iter_response_events
from ccr.runtime.events import error_chunk, error_stream
from ccr.runtime.routing import Route
from ccr.utils.telemetry import (
    ATTR_MESSAGE_COUNT,
    ATTR_MODEL,
    ATTR_PROVIDER,
    ATTR_STATUS_CODE,
    ATTR_STREAM,
    ATTR_UPSTREAM_URL,
    get_tracer,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ccr.runtime.context import ProxyContext
    from ccr.runtime.writer import Completion

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"
_MAX_ERROR_DETAIL = 500


class RequestDispatcher:
    """Translates, forwards and writes back one request at a time.

    Usage::

        dispatcher = RequestDispatcher(context)
        response = await dispatcher.handle(body, Route(provider="openrouter"))
    """

    def __init__(self, context: ProxyContext, transpiler: OpenAITranspiler | None = None) -> None:
        self._context = context
        self._transpiler = transpiler or OpenAITranspiler()

    async def handle(self, body: Any, route: Route | None = None) -> Any:
        """Run the full pipeline for *body* and return whatever the writer returns."""
        route = route or Route()
        requested_model = body.get("model") if isinstance(body, dict) else None
        model = requested_model

        completion: Completion
        try:
            request = MessagesRequest.model_validate(body)
            if route.model:
                request = request.model_copy(update={"model": route.model})
            model = request.model
            payload = self._transpiler.to_provider(request)
            completion = await self.dispatch(payload, route.provider)
        except Exception as exc:
            logger.exception("Error in direct API call")
            completion = error_stream(str(exc), requested_model)
        else:
            if not isinstance(completion, dict):
                completion = _guard_stream(completion, model)

        return await self._context.writer.write(completion, model, body)

    async def dispatch(self, payload: dict[str, Any], provider_name: str) -> Completion:
        """Send *payload* to *provider_name*.

        Returns the lazy decoded event stream when ``payload["stream"]`` is
        true, otherwise the parsed response body.

        Raises:
            ProviderNotFoundError: If *provider_name* is not registered.
            UpstreamHTTPError: If the provider answers with a non-2xx status.
        """
        provider = self._context.registry.get(provider_name)
        clients = self._context.clients
        client = await clients.acquire(provider_name)
        stream = bool(payload.get("stream"))

        async def release() -> None:
            await clients.release(client)

        handed_off = False
        try:
            with _tracer.start_as_current_span("proxy.dispatch") as span:
                span.set_attribute(ATTR_PROVIDER, provider.name)
                span.set_attribute(ATTR_MODEL, str(payload.get("model", "")))
                span.set_attribute(ATTR_STREAM, stream)
                span.set_attribute(ATTR_MESSAGE_COUNT, len(payload.get("messages", [])))

                request = client.build_request("POST", CHAT_COMPLETIONS_PATH, json=payload)
                span.set_attribute(ATTR_UPSTREAM_URL, str(request.url))
                logger.debug(
                    "Calling API: %s (provider=%s, stream=%s)", request.url, provider.name, stream
                )

                response = await client.send(request, stream=stream)
                span.set_attribute(ATTR_STATUS_CODE, response.status_code)

                if not response.is_success:
                    detail = await _error_detail(response)
                    raise UpstreamHTTPError(response.status_code, detail)

            if stream:
                # The lease now belongs to the stream and ends when it closes.
                handed_off = True
                return iter_response_events(response, after_close=release)
            result = response.json()
            if not isinstance(result, dict):
                msg = "Upstream response body is not a JSON object"
                raise ProxyError(msg)
            return result
        finally:
            if not handed_off:
                await release()


async def _error_detail(response: httpx.Response) -> str:
    """Read (and release) an error response, returning a trimmed body."""
    try:
        await response.aread()
    finally:
        await response.aclose()
    return response.text.strip()[:_MAX_ERROR_DETAIL]


async def _guard_stream(events: AsyncIterator[Any], model: str | None) -> AsyncIterator[Any]:
    """Pass events through; a transport failure mid-stream becomes a final error chunk."""
    try:
        async for event in events:
            yield event
    except httpx.HTTPError as exc:
        logger.exception("Upstream stream failed")
        yield error_chunk(str(exc), model)
    finally:
        await events.aclose()  # type: ignore[attr-defined]
