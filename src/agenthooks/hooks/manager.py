"""HookManager: per-session facade over config loading and event dispatch."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from agenthooks.hooks.aggregator import run_hooks_for_event
from agenthooks.hooks.config import get_global_hooks_path, get_project_hooks_path, load_hooks_config
from agenthooks.hooks.events import (
    build_session_stdin,
    build_stop_stdin,
    build_tool_event_stdin,
    build_user_prompt_stdin,
)
from agenthooks.types.hooks import HookEventName, HookEventResult, HooksConfig, HookStdin


class HookManager:
    """Builds request payloads and dispatches lifecycle events for one session.

    The manager holds the ``HooksConfig`` it was given (or loaded at
    construction).  It only re-reads the hook files when ``reload()`` is
    called.
    """

    def __init__(
        self,
        project_dir: str | Path,
        session_id: str = "",
        config: HooksConfig | None = None,
    ) -> None:
        self._project_dir = Path(project_dir)
        self._session_id = session_id
        self._config = config if config is not None else load_hooks_config(self._project_dir)

    @property
    def config(self) -> HooksConfig:
        return self._config

    @property
    def project_dir(self) -> Path:
        return self._project_dir

    @property
    def session_id(self) -> str:
        return self._session_id

    def reload(self) -> None:
        """Re-read the global and project hook files."""
        self._config = load_hooks_config(self._project_dir)

    def set_session_id(self, session_id: str) -> None:
        self._session_id = session_id

    def has_hooks(self, event: HookEventName | str | None = None) -> bool:
        """Check if any hooks are configured, optionally for one event."""
        if event is None:
            return not self._config.is_empty
        return bool(self._config.hooks_for(event))

    def config_paths(self) -> dict[str, Path]:
        return {
            "global": get_global_hooks_path(),
            "project": get_project_hooks_path(self._project_dir),
        }

    # ------------------------------------------------------------------
    # Event methods
    # ------------------------------------------------------------------

    async def run_pre_tool_use(self, tool_name: str, tool_input: Any) -> HookEventResult:
        stdin = build_tool_event_stdin(
            HookEventName.PRE_TOOL_USE,
            session_id=self._session_id,
            cwd=self._project_dir,
            tool_name=tool_name,
            tool_input=tool_input,
        )
        return await self._dispatch(HookEventName.PRE_TOOL_USE, stdin, tool_name)

    async def run_post_tool_use(
        self,
        tool_name: str,
        tool_input: Any,
        tool_output: Any,
        tool_error: bool,
    ) -> HookEventResult:
        stdin = build_tool_event_stdin(
            HookEventName.POST_TOOL_USE,
            session_id=self._session_id,
            cwd=self._project_dir,
            tool_name=tool_name,
            tool_input=tool_input,
            tool_output=tool_output,
            tool_error=tool_error,
        )
        return await self._dispatch(HookEventName.POST_TOOL_USE, stdin, tool_name)

    async def run_user_prompt_submit(self, user_message: str) -> HookEventResult:
        stdin = build_user_prompt_stdin(
            session_id=self._session_id,
            cwd=self._project_dir,
            user_message=user_message,
        )
        return await self._dispatch(HookEventName.USER_PROMPT_SUBMIT, stdin)

    async def run_stop(
        self, assistant_message: str | None, stop_reason: str = "complete",
    ) -> HookEventResult:
        stdin = build_stop_stdin(
            session_id=self._session_id,
            cwd=self._project_dir,
            stop_reason=stop_reason,
            assistant_message=assistant_message,
        )
        return await self._dispatch(HookEventName.STOP, stdin)

    async def run_session_start(self) -> HookEventResult:
        stdin = build_session_stdin(
            HookEventName.SESSION_START, session_id=self._session_id, cwd=self._project_dir,
        )
        return await self._dispatch(HookEventName.SESSION_START, stdin)

    async def run_session_end(self) -> HookEventResult:
        stdin = build_session_stdin(
            HookEventName.SESSION_END, session_id=self._session_id, cwd=self._project_dir,
        )
        return await self._dispatch(HookEventName.SESSION_END, stdin)

    async def _dispatch(
        self, event: HookEventName, stdin: HookStdin, tool_name: str | None = None,
    ) -> HookEventResult:
        hooks = self._config.hooks_for(event)
        if not hooks:
            return HookEventResult.completed()
        match_context = {"tool_name": tool_name} if tool_name is not None else {}
        return await run_hooks_for_event(hooks, stdin, match_context)
