"""Prompt-cache annotation for upstream providers that honour ``cache_control``."""

from collections.abc import Sequence
from typing import Any


def ephemeral() -> dict[str, str]:
    """Return a fresh ephemeral cache marker."""
    return {"type": "ephemeral"}


def annotate_last_message(messages: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Mark the final content block of the final message as cacheable.

    String content is rewrapped as a single text block carrying the marker.
    List content is marked only when its last block is a text block. The
    input list and its messages are left untouched.
    """
    if not messages:
        return []

    *head, last = messages
    last = dict(last)
    content = last.get("content")

    if isinstance(content, str):
        last["content"] = [{"type": "text", "text": content, "cache_control": ephemeral()}]
    elif isinstance(content, list) and content:
        blocks = list(content)
        tail = blocks[-1]
        if isinstance(tail, dict) and tail.get("type") == "text":
            blocks[-1] = {**tail, "cache_control": ephemeral()}
        last["content"] = blocks

    return [*head, last]
