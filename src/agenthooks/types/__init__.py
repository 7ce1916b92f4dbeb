"""Type definitions for agenthooks."""

from agenthooks.types.hooks import (
    BLOCKING_EVENTS,
    TOOL_EVENTS,
    HookDefinition,
    HookEventName,
    HookEventResult,
    HookMatcher,
    HookResult,
    HooksConfig,
    HookStdin,
    HookStdout,
    is_blocking_event,
)

__all__ = [
    "BLOCKING_EVENTS",
    "HookDefinition",
    "HookEventName",
    "HookEventResult",
    "HookMatcher",
    "HookResult",
    "HookStdin",
    "HookStdout",
    "HooksConfig",
    "TOOL_EVENTS",
    "is_blocking_event",
]
