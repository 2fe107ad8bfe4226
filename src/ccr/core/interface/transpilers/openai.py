"""OpenAI transpiler — Anthropic Messages request to OpenAI chat completion payload.

Key differences from the Anthropic format:
- The system prompt becomes leading ``system`` messages instead of a top-level field.
- Assistant ``tool_use`` blocks become a ``tool_calls`` array with JSON-string arguments.
- User ``tool_result`` blocks become standalone ``tool`` messages following the user text.
- Content is flattened to a single string per message.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

from ccr.core.interface.cache_control import annotate_last_message, ephemeral
from ccr.core.interface.models import (
    ContentBlock,
    JSONValue,
    MessagesRequest,
    SourceMessage,
    SystemEntry,
    TextBlock,
    ToolDefinition,
    ToolResultBlock,
    ToolUseBlock,
    block_to_wire,
)
from ccr.core.interface.tool_pairing import validate_tool_pairing

logger = logging.getLogger(__name__)

# Client-internal tools that must never reach an upstream provider.
RESERVED_TOOL_NAMES = frozenset({"StickerRequest"})


class OpenAITranspiler:
    """Converts an Anthropic Messages request into OpenAI's chat completion format."""

    def to_provider(self, request: MessagesRequest) -> dict[str, Any]:
        """Build the outbound payload.

        Runs translation, tool-pairing validation and cache annotation in that
        order. Returns ``{"model", "messages", "stream", "temperature"?, "tools"?}``.
        """
        messages = validate_tool_pairing(translate_messages(request.messages))
        messages = annotate_last_message([*build_system_messages(request.system), *messages])

        payload: dict[str, Any] = {
            "model": request.model,
            "messages": messages,
            "stream": request.stream,
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature

        tools = convert_tools(request.tools or [])
        if tools:
            payload["tools"] = tools
        return payload


def translate_messages(messages: Sequence[SourceMessage] | Any) -> list[dict[str, Any]]:
    """Flatten Anthropic messages into OpenAI messages, preserving order."""
    if not isinstance(messages, Sequence) or isinstance(messages, str):
        return []
    result: list[dict[str, Any]] = []
    for message in messages:
        result.extend(_translate_message(message))
    return result


def build_system_messages(system: str | Sequence[SystemEntry] | None) -> list[dict[str, Any]]:
    """Turn the top-level system field into cache-marked ``system`` messages."""
    if system is None:
        return []
    if isinstance(system, str):
        return [_system_message(system)]
    return [_system_message(entry.text) for entry in system]


def convert_tools(tools: Sequence[ToolDefinition]) -> list[dict[str, Any]]:
    """Map Anthropic tool declarations to OpenAI function tools.

    ``description`` is left out when the caller did not send one.
    """
    converted: list[dict[str, Any]] = []
    for tool in tools:
        if tool.name in RESERVED_TOOL_NAMES:
            continue
        function: dict[str, Any] = {"name": tool.name}
        if tool.description is not None:
            function["description"] = tool.description
        function["parameters"] = tool.input_schema
        converted.append({"type": "function", "function": function})
    return converted


def to_json_text(value: JSONValue) -> str:
    """Serialize any JSON value compactly."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


def as_text(value: JSONValue) -> str:
    """Return strings unchanged and JSON-encode everything else."""
    return value if isinstance(value, str) else to_json_text(value)


def _translate_message(message: SourceMessage) -> list[dict[str, Any]]:
    content = message.content
    if isinstance(content, str):
        return [{"role": message.role, "content": content}]
    if content is None:
        logger.debug("Skipping %s message without usable content", message.role)
        return []
    if message.role == "assistant":
        return _assistant_messages(content)
    if message.role == "user":
        return _user_messages(content)
    return _fallback_messages(message.role, content)


def _assistant_messages(blocks: list[ContentBlock]) -> list[dict[str, Any]]:
    text = ""
    tool_calls: list[dict[str, Any]] = []
    for block in blocks:
        if isinstance(block, TextBlock):
            text += as_text(block.text) + "\n"
        elif isinstance(block, ToolUseBlock):
            tool_calls.append(
                {
                    "id": block.id,
                    "type": "function",
                    "function": {"name": block.name, "arguments": to_json_text(block.input)},
                }
            )

    message: dict[str, Any] = {"role": "assistant", "content": text.strip() or None}
    if tool_calls:
        message["tool_calls"] = tool_calls
    if message["content"] is None and not tool_calls:
        return []
    return [message]


def _user_messages(blocks: list[ContentBlock]) -> list[dict[str, Any]]:
    text = ""
    tool_messages: list[dict[str, Any]] = []
    for block in blocks:
        if isinstance(block, TextBlock):
            text += as_text(block.text) + "\n"
        elif isinstance(block, ToolResultBlock):
            tool_messages.append(
                {
                    "role": "tool",
                    "tool_call_id": block.tool_use_id,
                    "content": as_text(block.content),
                }
            )

    result: list[dict[str, Any]] = []
    if text.strip():
        result.append({"role": "user", "content": text.strip()})
    result.extend(tool_messages)
    return result


def _fallback_messages(role: str, blocks: list[ContentBlock]) -> list[dict[str, Any]]:
    combined = ""
    for block in blocks:
        if isinstance(block, TextBlock):
            combined += as_text(block.text) + "\n"
        else:
            combined += to_json_text(block_to_wire(block)) + "\n"
    combined = combined.strip()
    return [{"role": role, "content": combined}] if combined else []


def _system_message(text: JSONValue) -> dict[str, Any]:
    return {
        "role": "system",
        "content": [{"type": "text", "text": text, "cache_control": ephemeral()}],
    }
