"""Hook configuration loading from the filesystem.

Two sources are read independently and merged:

* global: ``~/.agenthooks/hooks.json`` (or ``$AGENTHOOKS_HOME/hooks.json``)
* project: ``<project>/.agenthooks/hooks.json``

Global hooks run first; project hooks are appended after them.
"""

from __future__ import annotations

import json
import math
import logging
from pathlib import Path
from typing import Any

from agenthooks.core.config import HOOKS_DIR_NAME, HOOKS_FILE_NAME, hooks_home
from agenthooks.types.hooks import HookDefinition, HookEventName, HookMatcher, HooksConfig

logger = logging.getLogger(__name__)


def get_global_hooks_path() -> Path:
    return hooks_home() / HOOKS_FILE_NAME


def get_project_hooks_path(project_dir: str | Path) -> Path:
    return Path(project_dir) / HOOKS_DIR_NAME / HOOKS_FILE_NAME


def load_hooks_config(project_dir: str | Path) -> HooksConfig:
    """Load and merge the global and project hook configs.

    Never raises: a missing, unreadable or malformed file contributes
    nothing for its source.
    """
    global_config = load_hooks_file(get_global_hooks_path())
    project_config = load_hooks_file(get_project_hooks_path(project_dir))
    return merge_hooks_configs(global_config, project_config)


def load_hooks_file(path: str | Path) -> HooksConfig:
    """Load a single hooks.json file."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No hooks file at %s", path)
        return HooksConfig()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read hooks file %s: %s", path, exc)
        return HooksConfig()

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.warning("Failed to parse hooks file %s: %s", path, exc)
        return HooksConfig()

    config = parse_hooks_config(data)
    logger.debug("Loaded %d hook event(s) from %s", len(config), path)
    return config


def parse_hooks_config(raw: Any) -> HooksConfig:
    """Validate a decoded hooks document.

    Unknown event keys are ignored and malformed hook entries are dropped
    one by one, leaving the rest of the document intact.
    """
    if not isinstance(raw, dict):
        return HooksConfig()

    hooks: dict[HookEventName, list[HookDefinition]] = {}
    for event in HookEventName:
        entries = raw.get(event.value)
        if not isinstance(entries, list):
            continue
        parsed = [hook for hook in map(_parse_hook, entries) if hook is not None]
        if parsed:
            hooks[event] = parsed

    return HooksConfig(hooks)


def merge_hooks_configs(global_: HooksConfig, project: HooksConfig) -> HooksConfig:
    """Concatenate project hooks after global hooks for every event."""
    return global_.merged_with(project)


def _parse_hook(entry: Any) -> HookDefinition | None:
    if not isinstance(entry, dict):
        return None
    if entry.get("type") != "command" or not isinstance(entry.get("command"), str):
        return None

    matcher: HookMatcher | None = None
    raw_matcher = entry.get("matcher")
    if isinstance(raw_matcher, dict):
        tool_name = raw_matcher.get("tool_name")
        matcher = HookMatcher(tool_name=tool_name if isinstance(tool_name, str) else None)

    timeout: int | None = None
    raw_timeout = entry.get("timeout")
    if isinstance(raw_timeout, (int, float)) and not isinstance(raw_timeout, bool):
        if math.isfinite(raw_timeout) and raw_timeout > 0:
            timeout = max(1, int(raw_timeout))

    description = entry.get("description")

    return HookDefinition(
        command=entry["command"],
        matcher=matcher,
        timeout=timeout,
        description=description if isinstance(description, str) else None,
    )
