"""Hook execution: config loading, matching, process running, event dispatch."""

from agenthooks.hooks.aggregator import run_hooks_for_event
from agenthooks.hooks.config import (
    get_global_hooks_path,
    get_project_hooks_path,
    load_hooks_config,
    load_hooks_file,
    merge_hooks_configs,
    parse_hooks_config,
)
from agenthooks.hooks.executor import DEFAULT_TIMEOUT_MS, effective_timeout_ms, execute_hook
from agenthooks.hooks.manager import HookManager
from agenthooks.hooks.matcher import filter_hooks, matches_hook

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "HookManager",
    "effective_timeout_ms",
    "execute_hook",
    "filter_hooks",
    "get_global_hooks_path",
    "get_project_hooks_path",
    "load_hooks_config",
    "load_hooks_file",
    "matches_hook",
    "merge_hooks_configs",
    "parse_hooks_config",
    "run_hooks_for_event",
]
