"""Tool-call pairing validation for OpenAI-format message lists.

OpenAI-compatible backends reject histories where an assistant ``tool_calls``
entry has no answering ``tool`` message, or where a ``tool`` message answers a
call that is not in the assistant message directly above it. Clients trimming
their context routinely produce both, so the translated list is repaired
before it is sent:

- a tool call survives only if a ``tool`` message with its id appears in the
  contiguous run of ``tool`` messages immediately after the assistant message;
- a ``tool`` message survives only if the assistant message above its run of
  ``tool`` messages owns a call with the same id;
- an assistant message left with neither content nor tool calls is dropped.

The pass is idempotent.
"""

import logging
from collections.abc import Sequence
from typing import Any

logger = logging.getLogger(__name__)


def validate_tool_pairing(messages: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return a copy of *messages* with unpaired tool calls and results removed."""
    validated: list[dict[str, Any]] = []

    for index, original in enumerate(messages):
        role = original.get("role")

        if role == "assistant" and original.get("tool_calls") is not None:
            message = _prune_tool_calls(dict(original), _following_tool_ids(messages, index))
            if message.get("content") or message.get("tool_calls"):
                validated.append(message)
            else:
                logger.info("Removed empty assistant message after tool_call cleanup")

        elif role == "tool":
            if _has_owning_tool_call(messages, index):
                validated.append(dict(original))
            else:
                logger.info(
                    "Removed tool message without immediately preceding tool_call: %s",
                    original.get("tool_call_id"),
                )

        else:
            validated.append(dict(original))

    return validated


def _following_tool_ids(messages: Sequence[dict[str, Any]], index: int) -> set[Any]:
    """Collect ``tool_call_id`` values from the tool run right after *index*."""
    ids: set[Any] = set()
    for message in messages[index + 1 :]:
        if message.get("role") != "tool":
            break
        ids.add(message.get("tool_call_id"))
    return ids


def _prune_tool_calls(message: dict[str, Any], answered: set[Any]) -> dict[str, Any]:
    kept: list[dict[str, Any]] = []
    removed = 0
    for tool_call in message["tool_calls"]:
        if tool_call.get("id") in answered:
            kept.append(tool_call)
            continue
        removed += 1
        logger.info(
            "Removed tool_call without immediately following tool message: %s (%s)",
            tool_call.get("function", {}).get("name"),
            tool_call.get("id"),
        )

    if kept:
        message["tool_calls"] = kept
    else:
        del message["tool_calls"]
    if removed:
        logger.info("Removed %d incomplete tool_calls from assistant message", removed)
    return message


def _has_owning_tool_call(messages: Sequence[dict[str, Any]], index: int) -> bool:
    """Check the assistant message above the tool run containing *index*.

    Only the first non-tool message above the run is consulted; an owner
    further up the history does not count.
    """
    if index == 0:
        return False

    previous = messages[index - 1]
    if previous.get("role") == "tool":
        owner = None
        for candidate in reversed(messages[: index - 1]):
            if candidate.get("role") != "tool":
                owner = candidate
                break
        if owner is None:
            return False
        previous = owner

    if previous.get("role") != "assistant" or not previous.get("tool_calls"):
        return False
    tool_call_id = messages[index].get("tool_call_id")
    return any(tool_call.get("id") == tool_call_id for tool_call in previous["tool_calls"])
