"""HTTP surface of the proxy."""

from ccr.server.app import create_app
from ccr.server.writer import SSEPassthroughWriter

__all__ = ["SSEPassthroughWriter", "create_app"]
