"""Tests for HookManager and the per-event request payload builders."""

from __future__ import annotations

from pathlib import Path

import pytest

from agenthooks.hooks.events import (
    build_session_stdin,
    build_stop_stdin,
    build_tool_event_stdin,
    build_user_prompt_stdin,
)
from agenthooks.hooks.manager import HookManager
from agenthooks.types.hooks import HookEventName, HooksConfig
from tests.conftest import make_hook, posix_only


class TestPayloadBuilders:
    def test_pre_tool_use(self):
        stdin = build_tool_event_stdin(
            HookEventName.PRE_TOOL_USE,
            session_id="s1", cwd="/proj", tool_name="Bash", tool_input={"command": "ls"},
        )
        assert stdin == {
            "session_id": "s1",
            "cwd": "/proj",
            "hook_event_name": "PreToolUse",
            "tool_name": "Bash",
            "tool_input": {"command": "ls"},
        }

    def test_post_tool_use(self):
        stdin = build_tool_event_stdin(
            "PostToolUse",
            session_id="s1", cwd=Path("/proj"), tool_name="Read",
            tool_input={"file_path": "a.py"}, tool_output="contents", tool_error=False,
        )
        assert stdin["hook_event_name"] == "PostToolUse"
        assert stdin["cwd"] == str(Path("/proj"))
        assert stdin["tool_output"] == "contents"
        assert stdin["tool_error"] is False

    def test_tool_builder_rejects_other_events(self):
        with pytest.raises(ValueError):
            build_tool_event_stdin("Stop", session_id="", cwd="/", tool_name="x", tool_input={})

    def test_user_prompt(self):
        stdin = build_user_prompt_stdin(session_id="s", cwd="/p", user_message="fix it")
        assert stdin["hook_event_name"] == "UserPromptSubmit"
        assert stdin["user_message"] == "fix it"

    def test_stop(self):
        stdin = build_stop_stdin(session_id="s", cwd="/p", stop_reason="aborted")
        assert stdin["hook_event_name"] == "Stop"
        assert stdin["stop_reason"] == "aborted"
        assert "assistant_message" not in stdin

    def test_stop_with_message(self):
        stdin = build_stop_stdin(session_id="s", cwd="/p", stop_reason="complete", assistant_message="done")
        assert stdin["assistant_message"] == "done"

    def test_stop_invalid_reason(self):
        with pytest.raises(ValueError):
            build_stop_stdin(session_id="s", cwd="/p", stop_reason="bored")

    def test_session_events(self):
        assert build_session_stdin("SessionStart", session_id="s", cwd="/p")["hook_event_name"] == "SessionStart"
        assert build_session_stdin(HookEventName.SESSION_END, session_id="s", cwd="/p")["hook_event_name"] == "SessionEnd"
        with pytest.raises(ValueError):
            build_session_stdin("PreToolUse", session_id="s", cwd="/p")


class TestHookManagerConfig:
    def test_loads_config_from_files(self, tmp_project: Path, write_hooks):
        write_hooks(tmp_project / ".agenthooks", {"Stop": [{"type": "command", "command": "x"}]})
        mgr = HookManager(tmp_project, "s1")
        assert mgr.has_hooks() is True
        assert mgr.has_hooks("Stop") is True
        assert mgr.has_hooks(HookEventName.PRE_TOOL_USE) is False

    def test_explicit_config_skips_files(self, tmp_project: Path, write_hooks):
        write_hooks(tmp_project / ".agenthooks", {"Stop": [{"type": "command", "command": "x"}]})
        mgr = HookManager(tmp_project, "s1", config=HooksConfig())
        assert mgr.has_hooks() is False

    def test_reload(self, tmp_project: Path, write_hooks):
        mgr = HookManager(tmp_project)
        assert mgr.has_hooks() is False
        write_hooks(tmp_project / ".agenthooks", {"SessionStart": [{"type": "command", "command": "x"}]})
        assert mgr.has_hooks() is False
        mgr.reload()
        assert mgr.has_hooks("SessionStart") is True

    def test_config_paths(self, tmp_project: Path, isolated_home: Path):
        mgr = HookManager(tmp_project)
        assert mgr.config_paths() == {
            "global": isolated_home / "hooks.json",
            "project": tmp_project / ".agenthooks" / "hooks.json",
        }

    def test_session_id(self, tmp_project: Path):
        mgr = HookManager(tmp_project, "a")
        mgr.set_session_id("b")
        assert mgr.session_id == "b"


@posix_only
class TestHookManagerEvents:
    @pytest.mark.asyncio
    async def test_no_hooks_for_event(self, tmp_project: Path):
        mgr = HookManager(tmp_project, "s1", config=HooksConfig({"Stop": [make_hook("exit 2")]}))
        result = await mgr.run_pre_tool_use("Bash", {"command": "ls"})
        assert result.allowed is True
        assert result.results == ()

    @pytest.mark.asyncio
    async def test_pre_tool_use_payload_and_matcher(self, tmp_project: Path):
        config = HooksConfig({
            "PreToolUse": [
                make_hook("cat", tool_name="^Bash$"),
                make_hook("touch read-hook-ran", tool_name="^Read$"),
            ],
        })
        mgr = HookManager(tmp_project, "s1", config=config)
        result = await mgr.run_pre_tool_use("Bash", {"command": "ls"})
        assert len(result.results) == 1
        assert result.results[0].stdout.raw == {
            "session_id": "s1",
            "cwd": str(tmp_project),
            "hook_event_name": "PreToolUse",
            "tool_name": "Bash",
            "tool_input": {"command": "ls"},
        }
        assert not (tmp_project / "read-hook-ran").exists()

    @pytest.mark.asyncio
    async def test_pre_tool_use_blocked(self, tmp_project: Path):
        config = HooksConfig({"PreToolUse": [make_hook("echo 'no writes' >&2; exit 2")]})
        mgr = HookManager(tmp_project, config=config)
        result = await mgr.run_pre_tool_use("Write", {"file_path": "a"})
        assert result.allowed is False
        assert result.block_reason == "no writes"

    @pytest.mark.asyncio
    async def test_post_tool_use_cannot_block(self, tmp_project: Path):
        config = HooksConfig({"PostToolUse": [make_hook("cat; exit 2")]})
        mgr = HookManager(tmp_project, "s1", config=config)
        result = await mgr.run_post_tool_use("Read", {"file_path": "a"}, "text", True)
        assert result.allowed is True
        assert result.results[0].stdout.raw["tool_output"] == "text"
        assert result.results[0].stdout.raw["tool_error"] is True
        assert len(result.warnings) == 1

    @pytest.mark.asyncio
    async def test_user_prompt_submit_context(self, tmp_project: Path):
        config = HooksConfig({
            "UserPromptSubmit": [make_hook("""echo '{"additionalContext": "branch: main"}'""")],
        })
        mgr = HookManager(tmp_project, config=config)
        result = await mgr.run_user_prompt_submit("hello")
        assert result.allowed is True
        assert result.additional_context == "branch: main"

    @pytest.mark.asyncio
    async def test_stop_blocks(self, tmp_project: Path):
        config = HooksConfig({"Stop": [make_hook("exit 2", description="tests must pass")]})
        mgr = HookManager(tmp_project, config=config)
        result = await mgr.run_stop("all done", "complete")
        assert result.allowed is False
        assert result.block_reason == "Blocked by hook: tests must pass"

    @pytest.mark.asyncio
    async def test_session_start_and_end_are_advisory(self, tmp_project: Path):
        config = HooksConfig({
            "SessionStart": [make_hook("exit 2")],
            "SessionEnd": [make_hook("exit 2")],
        })
        mgr = HookManager(tmp_project, config=config)
        assert (await mgr.run_session_start()).allowed is True
        assert (await mgr.run_session_end()).allowed is True
