"""agenthooks: lifecycle hooks for coding agents.

Usage:
    import agenthooks

    config = agenthooks.load_hooks_config("/path/to/project")
    result = await agenthooks.run_hooks_for_event(
        config.hooks_for("PreToolUse"),
        {"hook_event_name": "PreToolUse", "cwd": "/path/to/project", "tool_name": "Bash"},
        {"tool_name": "Bash"},
    )
    if not result.allowed:
        print(f"Blocked: {result.block_reason}")
"""

from agenthooks.hooks.aggregator import run_hooks_for_event
from agenthooks.hooks.config import load_hooks_config
from agenthooks.hooks.executor import execute_hook
from agenthooks.hooks.manager import HookManager
from agenthooks.hooks.matcher import matches_hook
from agenthooks.types.hooks import (
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

__version__ = "0.1.0"

__all__ = [
    # Core API
    "execute_hook",
    "load_hooks_config",
    "matches_hook",
    "run_hooks_for_event",
    "HookManager",
    # Types
    "HookDefinition",
    "HookEventName",
    "HookEventResult",
    "HookMatcher",
    "HookResult",
    "HookStdin",
    "HookStdout",
    "HooksConfig",
    "is_blocking_event",
]
