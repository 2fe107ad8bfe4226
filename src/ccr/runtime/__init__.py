"""Request pipeline — routing, dispatch, and the response-writer seam."""

from ccr.runtime.context import ProxyContext
from ccr.runtime.dispatcher import RequestDispatcher
from ccr.runtime.events import error_chunk, error_stream
from ccr.runtime.routing import Route, Router, StaticRouter
from ccr.runtime.writer import ResponseWriter, response_headers

__all__ = [
    "ProxyContext",
    "RequestDispatcher",
    "ResponseWriter",
    "Route",
    "Router",
    "StaticRouter",
    "error_chunk",
    "error_stream",
    "response_headers",
]
