"""Source message schema — the Anthropic Messages request the proxy accepts.

Content blocks form a tagged union keyed on ``type``. Blocks the proxy does
not translate (images, thinking, documents, ...) are kept as
:class:`OpaqueBlock` so fallback branches can still serialize them.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# Arbitrary JSON payload (tool inputs, tool outputs, unknown blocks).
JSONValue = Any

# ---------------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------------


class TextBlock(BaseModel):
    """Plain text block. ``text`` is normally a string but is not trusted to be."""

    model_config = ConfigDict(extra="allow")

    type: Literal["text"] = "text"
    text: JSONValue = ""


class ToolUseBlock(BaseModel):
    """A tool invocation emitted by the assistant."""

    model_config = ConfigDict(extra="allow")

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: JSONValue = Field(default_factory=dict)


class ToolResultBlock(BaseModel):
    """The caller's answer to a previous :class:`ToolUseBlock`."""

    model_config = ConfigDict(extra="allow")

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: JSONValue = ""


class OpaqueBlock(BaseModel):
    """Any block the proxy does not translate; ``raw`` is the block as received."""

    type: str = ""
    raw: JSONValue = None


ContentBlock = TextBlock | ToolUseBlock | ToolResultBlock | OpaqueBlock

_BLOCK_TYPES: dict[str, type[BaseModel]] = {
    "text": TextBlock,
    "tool_use": ToolUseBlock,
    "tool_result": ToolResultBlock,
}


def parse_block(raw: JSONValue) -> ContentBlock:
    """Parse one raw content block, falling back to :class:`OpaqueBlock`."""
    if not isinstance(raw, dict):
        return OpaqueBlock(raw=raw)
    block_type = raw.get("type")
    model = _BLOCK_TYPES.get(block_type) if isinstance(block_type, str) else None
    if model is None:
        return OpaqueBlock(type=str(block_type or ""), raw=raw)
    try:
        return model.model_validate(raw)  # type: ignore[return-value]
    except ValidationError as exc:
        logger.debug("Treating malformed %s block as opaque: %s", block_type, exc)
        return OpaqueBlock(type=block_type, raw=raw)


def block_to_wire(block: ContentBlock) -> JSONValue:
    """Return the JSON shape of a block as it arrived on the wire.

    Only fields the caller sent are included; defaults are not filled in.
    """
    if isinstance(block, OpaqueBlock):
        return block.raw
    return block.model_dump(mode="json", exclude_unset=True)


# ---------------------------------------------------------------------------
# Messages and request envelope
# ---------------------------------------------------------------------------


class SourceMessage(BaseModel):
    """A single message in the Anthropic request.

    ``content`` is a string, an ordered list of blocks, or ``None`` when the
    caller sent something else (which the translator then skips).
    """

    model_config = ConfigDict(extra="allow")

    role: str
    content: str | list[ContentBlock] | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _parse_content(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return [parse_block(item) for item in value]
        if value is not None:
            logger.debug("Ignoring unsupported message content of type %s", type(value).__name__)
        return None


class SystemEntry(BaseModel):
    """One entry of a list-shaped system prompt."""

    model_config = ConfigDict(extra="allow")

    type: str = "text"
    text: JSONValue = ""


class ToolDefinition(BaseModel):
    """A tool declaration as sent by the caller."""

    model_config = ConfigDict(extra="allow")

    name: str
    description: str | None = None
    input_schema: dict[str, Any] = Field(default_factory=dict)


class MessagesRequest(BaseModel):
    """Inbound ``POST /v1/messages`` body.

    Fields the proxy does not forward (``max_tokens``, ``metadata``, ...) are
    still accepted so the original body validates unchanged.
    """

    model_config = ConfigDict(extra="allow")

    model: str = ""
    max_tokens: int | None = None
    messages: list[SourceMessage] = []
    system: str | list[SystemEntry] | None = None
    temperature: float | None = None
    metadata: dict[str, Any] | None = None
    tools: list[ToolDefinition] | None = None
    stream: bool = False

    @field_validator("messages", mode="before")
    @classmethod
    def _messages_as_list(cls, value: Any) -> Any:
        if not isinstance(value, list):
            if value is not None:
                logger.debug("Ignoring non-list messages field of type %s", type(value).__name__)
            return []
        messages = []
        for index, item in enumerate(value):
            if isinstance(item, SourceMessage) or (
                isinstance(item, dict) and isinstance(item.get("role"), str)
            ):
                messages.append(item)
            else:
                logger.debug("Skipping message %d without an object shape and string role", index)
        return messages

    @field_validator("tools", mode="before")
    @classmethod
    def _named_tools(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, list):
            logger.debug("Ignoring non-list tools field of type %s", type(value).__name__)
            return None
        tools = []
        for index, item in enumerate(value):
            if isinstance(item, ToolDefinition) or (
                isinstance(item, dict) and isinstance(item.get("name"), str)
            ):
                tools.append(item)
            else:
                logger.debug("Skipping tool %d without a name", index)
        return tools
