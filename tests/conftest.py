"""Shared fixtures: an isolated hooks home, a project dir, and hook file writers."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from agenthooks.types.hooks import HookDefinition, HookEventName, HookMatcher, HookStdin

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="hook commands use /bin/sh syntax")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global hooks file at a temp dir so the real one is never read."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("AGENTHOOKS_HOME", str(home))
    monkeypatch.delenv("AGENTHOOKS_DEFAULT_TIMEOUT_MS", raising=False)
    return home


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a temporary project directory."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "README.md").write_text("# Test Project\n")
    return project


@pytest.fixture
def write_hooks() -> Callable[[Path, Any], Path]:
    """Write a hooks document to ``<dir>/hooks.json`` (dir is created)."""

    def _write(directory: Path, data: Any) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "hooks.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path

    return _write


def make_hook(
    command: str,
    *,
    tool_name: str | None = None,
    timeout: int | None = None,
    description: str | None = None,
) -> HookDefinition:
    return HookDefinition(
        command=command,
        matcher=HookMatcher(tool_name=tool_name) if tool_name is not None else None,
        timeout=timeout,
        description=description,
    )


def make_stdin(event: HookEventName | str, cwd: Path | str, **fields: Any) -> HookStdin:
    name = event.value if isinstance(event, HookEventName) else event
    return {"session_id": "test-session", "cwd": str(cwd), "hook_event_name": name, **fields}
