"""FastAPI application exposing the Anthropic Messages endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, Response

from ccr import __version__
from ccr.runtime.dispatcher import RequestDispatcher

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from ccr.runtime.context import ProxyContext

logger = logging.getLogger(__name__)


def create_app(context: ProxyContext) -> FastAPI:
    """Build the app around an already-constructed :class:`ProxyContext`."""
    dispatcher = RequestDispatcher(context)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await context.aclose()

    app = FastAPI(title="ccr", version=__version__, lifespan=lifespan)
    app.state.context = context

    @app.post("/v1/messages")
    async def create_message(request: Request) -> Response:
        body: Any
        try:
            body = await request.json()
        except ValueError:
            logger.warning("Request body is not valid JSON")
            body = {}
        route = context.router.route(body)
        return await dispatcher.handle(body, route)  # type: ignore[no-any-return]

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/v1/models")
    async def list_models() -> dict[str, Any]:
        data: list[dict[str, Any]] = []
        seen: set[str] = set()
        for provider in context.registry:
            if provider.name in seen:
                continue
            seen.add(provider.name)
            data.extend(
                {"id": model, "object": "model", "owned_by": provider.name}
                for model in sorted(provider.models)
            )
        return {"object": "list", "data": data}

    return app
