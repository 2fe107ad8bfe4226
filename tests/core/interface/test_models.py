"""Tests for the Anthropic request schema."""

from ccr.core.interface.models import (
    MessagesRequest,
    OpaqueBlock,
    SourceMessage,
    SystemEntry,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    block_to_wire,
    parse_block,
)


class TestParseBlock:
    def test_text(self) -> None:
        block = parse_block({"type": "text", "text": "hello"})
        assert isinstance(block, TextBlock)
        assert block.text == "hello"

    def test_tool_use(self) -> None:
        block = parse_block({"type": "tool_use", "id": "t1", "name": "f", "input": {"x": 1}})
        assert isinstance(block, ToolUseBlock)
        assert block.input == {"x": 1}

    def test_tool_result_with_list_content(self) -> None:
        raw = {"type": "tool_result", "tool_use_id": "t1", "content": [{"type": "text", "text": "4"}]}
        block = parse_block(raw)
        assert isinstance(block, ToolResultBlock)
        assert block.content == [{"type": "text", "text": "4"}]

    def test_unknown_type_is_opaque(self) -> None:
        raw = {"type": "image", "source": {"type": "url", "url": "https://x/cat.png"}}
        block = parse_block(raw)
        assert isinstance(block, OpaqueBlock)
        assert block.type == "image"
        assert block_to_wire(block) == raw

    def test_malformed_tool_use_is_opaque(self) -> None:
        block = parse_block({"type": "tool_use", "name": "f"})
        assert isinstance(block, OpaqueBlock)
        assert block.type == "tool_use"

    def test_non_dict_is_opaque(self) -> None:
        block = parse_block("stray")
        assert isinstance(block, OpaqueBlock)
        assert block.raw == "stray"

    def test_extra_fields_survive_round_trip(self) -> None:
        raw = {"type": "text", "text": "hi", "cache_control": {"type": "ephemeral"}}
        assert block_to_wire(parse_block(raw)) == raw


class TestSourceMessage:
    def test_string_content(self) -> None:
        msg = SourceMessage.model_validate({"role": "user", "content": "Hi"})
        assert msg.content == "Hi"

    def test_list_content_parsed(self) -> None:
        msg = SourceMessage.model_validate(
            {"role": "user", "content": [{"type": "text", "text": "Hi"}, {"type": "image"}]}
        )
        assert isinstance(msg.content, list)
        assert isinstance(msg.content[0], TextBlock)
        assert isinstance(msg.content[1], OpaqueBlock)

    def test_unsupported_content_becomes_none(self) -> None:
        msg = SourceMessage.model_validate({"role": "user", "content": 42})
        assert msg.content is None

    def test_missing_content(self) -> None:
        msg = SourceMessage.model_validate({"role": "assistant"})
        assert msg.content is None


class TestMessagesRequest:
    def test_minimal(self) -> None:
        req = MessagesRequest.model_validate({"model": "claude", "messages": []})
        assert req.model == "claude"
        assert req.stream is False
        assert req.system is None

    def test_non_list_messages_becomes_empty(self) -> None:
        req = MessagesRequest.model_validate({"model": "claude", "messages": "oops"})
        assert req.messages == []

    def test_system_list(self) -> None:
        req = MessagesRequest.model_validate(
            {"model": "m", "messages": [], "system": [{"type": "text", "text": "a"}]}
        )
        assert isinstance(req.system, list)
        assert isinstance(req.system[0], SystemEntry)
        assert req.system[0].text == "a"

    def test_extra_fields_allowed(self) -> None:
        req = MessagesRequest.model_validate(
            {"model": "m", "messages": [], "max_tokens": 100, "thinking": {"type": "enabled"}}
        )
        assert req.max_tokens == 100

    def test_non_object_message_skipped(self) -> None:
        req = MessagesRequest.model_validate(
            {"model": "m", "messages": [{"role": "user", "content": "hi"}, "junk", 7]}
        )
        assert [m.content for m in req.messages] == ["hi"]

    def test_message_without_role_skipped(self) -> None:
        req = MessagesRequest.model_validate(
            {
                "model": "m",
                "messages": [
                    {"role": "user", "content": "hi"},
                    {"content": None},
                    {"role": 3, "content": "x"},
                ],
            }
        )
        assert len(req.messages) == 1
        assert req.messages[0].role == "user"

    def test_tool_without_name_skipped(self) -> None:
        req = MessagesRequest.model_validate(
            {
                "model": "m",
                "messages": [],
                "tools": [{"description": "x"}, "junk", {"name": "Bash"}],
            }
        )
        assert req.tools is not None
        assert [t.name for t in req.tools] == ["Bash"]

    def test_non_list_tools_ignored(self) -> None:
        req = MessagesRequest.model_validate({"model": "m", "messages": [], "tools": "Bash"})
        assert req.tools is None


class TestBlockToWire:
    def test_defaults_not_added(self) -> None:
        assert block_to_wire(parse_block({"type": "tool_use", "id": "t1", "name": "f"})) == {
            "type": "tool_use",
            "id": "t1",
            "name": "f",
        }
        assert block_to_wire(parse_block({"type": "tool_result", "tool_use_id": "t1"})) == {
            "type": "tool_result",
            "tool_use_id": "t1",
        }
