"""Anthropic Messages schema and the translation pipeline to OpenAI format."""

from ccr.core.interface.cache_control import annotate_last_message, ephemeral
from ccr.core.interface.config import ProviderConfig
from ccr.core.interface.models import (
    ContentBlock,
    MessagesRequest,
    OpaqueBlock,
    SourceMessage,
    SystemEntry,
    TextBlock,
    ToolDefinition,
    ToolResultBlock,
    ToolUseBlock,
)
from ccr.core.interface.tool_pairing import validate_tool_pairing
from ccr.core.interface.transpilers.openai import (
    OpenAITranspiler,
    build_system_messages,
    convert_tools,
    translate_messages,
)

__all__ = [
    "ContentBlock",
    "MessagesRequest",
    "OpaqueBlock",
    "OpenAITranspiler",
    "ProviderConfig",
    "SourceMessage",
    "SystemEntry",
    "TextBlock",
    "ToolDefinition",
    "ToolResultBlock",
    "ToolUseBlock",
    "annotate_last_message",
    "build_system_messages",
    "convert_tools",
    "ephemeral",
    "translate_messages",
    "validate_tool_pairing",
]
