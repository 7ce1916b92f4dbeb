"""Request payload builders for each lifecycle event."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agenthooks.types.hooks import TOOL_EVENTS, HookEventName, HookStdin

STOP_REASONS = ("complete", "aborted", "error")


def _base_stdin(event: HookEventName, session_id: str, cwd: str | Path) -> HookStdin:
    return {
        "session_id": session_id,
        "cwd": str(cwd),
        "hook_event_name": event.value,
    }


def build_tool_event_stdin(
    event: HookEventName | str,
    *,
    session_id: str,
    cwd: str | Path,
    tool_name: str,
    tool_input: Any,
    tool_output: Any = None,
    tool_error: bool | None = None,
) -> HookStdin:
    """Build the payload for PreToolUse / PostToolUse."""
    parsed = HookEventName.parse(event)
    if parsed not in TOOL_EVENTS:
        raise ValueError(f"Not a tool event: {event!r}")

    stdin = _base_stdin(parsed, session_id, cwd)
    stdin["tool_name"] = tool_name
    stdin["tool_input"] = tool_input
    if tool_output is not None:
        stdin["tool_output"] = tool_output
    if tool_error is not None:
        stdin["tool_error"] = tool_error
    return stdin


def build_user_prompt_stdin(*, session_id: str, cwd: str | Path, user_message: str) -> HookStdin:
    stdin = _base_stdin(HookEventName.USER_PROMPT_SUBMIT, session_id, cwd)
    stdin["user_message"] = user_message
    return stdin


def build_stop_stdin(
    *,
    session_id: str,
    cwd: str | Path,
    stop_reason: str,
    assistant_message: str | None = None,
) -> HookStdin:
    """Build the payload for Stop.  *stop_reason* is one of STOP_REASONS."""
    if stop_reason not in STOP_REASONS:
        raise ValueError(
            f"Invalid stop_reason {stop_reason!r}; expected one of {', '.join(STOP_REASONS)}"
        )
    stdin = _base_stdin(HookEventName.STOP, session_id, cwd)
    if assistant_message is not None:
        stdin["assistant_message"] = assistant_message
    stdin["stop_reason"] = stop_reason
    return stdin


def build_session_stdin(
    event: HookEventName | str, *, session_id: str, cwd: str | Path,
) -> HookStdin:
    """Build the payload for SessionStart / SessionEnd."""
    parsed = HookEventName.parse(event)
    if parsed not in (HookEventName.SESSION_START, HookEventName.SESSION_END):
        raise ValueError(f"Not a session event: {event!r}")
    return _base_stdin(parsed, session_id, cwd)
