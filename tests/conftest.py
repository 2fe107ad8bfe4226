"""Shared fixtures: a mocked upstream provider and a proxy context wired to it."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from ccr.core.interface.config import ProviderConfig
from ccr.protocols.client_cache import ProviderClientCache
from ccr.protocols.registry import DEFAULT_PROVIDER, ProviderRegistry
from ccr.runtime.context import ProxyContext
from ccr.runtime.routing import StaticRouter

if TYPE_CHECKING:
    from collections.abc import Callable

    from ccr.runtime.writer import Completion, ResponseWriter


def _sse_body(events: tuple[dict[str, Any], ...], *, done: bool) -> bytes:
    lines = [f"data: {json.dumps(event)}\n\n" for event in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()


def _chunk(content: str, finish_reason: str | None = None) -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "model": "gpt-4o",
        "choices": [{"index": 0, "delta": {"content": content}, "finish_reason": finish_reason}],
    }


class MockUpstream:
    """Records every outbound request and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.stream(_chunk("hi", "stop"))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def respond(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler

    def stream(self, *events: dict[str, Any], done: bool = True) -> None:
        body = _sse_body(events, done=done)
        self.respond(lambda _: httpx.Response(200, content=body))

    def respond_json(self, body: Any, status_code: int = 200) -> None:
        self.respond(lambda _: httpx.Response(status_code, json=body))

    def fail(self, status_code: int, text: str = "") -> None:
        self.respond(lambda _: httpx.Response(status_code, text=text))

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


class MockClientCache(ProviderClientCache):
    """Client cache whose clients talk to a :class:`MockUpstream`."""

    def __init__(self, registry: ProviderRegistry, upstream: MockUpstream) -> None:
        super().__init__(registry)
        self._upstream = upstream

    def _build(self, provider: ProviderConfig) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=provider.api_base_url,
            headers={"Authorization": f"Bearer {provider.api_key}"},
            transport=httpx.MockTransport(self._upstream),
        )


class RecordingWriter:
    """Drains whatever it is handed and remembers each call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, str | None, Any]] = []

    async def write(self, completion: Completion, model: str | None, original: Any) -> Any:
        result = completion if isinstance(completion, dict) else [e async for e in completion]
        self.calls.append((result, model, original))
        return result


@pytest.fixture
def upstream() -> MockUpstream:
    return MockUpstream()


@pytest.fixture
def registry() -> ProviderRegistry:
    openrouter = ProviderConfig(
        name="openrouter",
        api_base_url="https://openrouter.example.com/api",
        api_key="sk-or",
        models=frozenset({"anthropic/claude-sonnet-4", "google/gemini-2.5-pro"}),
    )
    deepseek = ProviderConfig(
        name="deepseek",
        api_base_url="https://api.deepseek.example.com",
        api_key="sk-ds",
        models=frozenset({"deepseek-chat"}),
    )
    reg = ProviderRegistry([openrouter, deepseek])
    reg.register(openrouter, alias=DEFAULT_PROVIDER)
    return reg


@pytest.fixture
def make_context(
    registry: ProviderRegistry, upstream: MockUpstream
) -> Callable[..., ProxyContext]:
    def _make(writer: ResponseWriter, router: StaticRouter | None = None) -> ProxyContext:
        return ProxyContext(
            registry=registry,
            clients=MockClientCache(registry, upstream),
            router=router or StaticRouter(),
            writer=writer,
        )

    return _make


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()
