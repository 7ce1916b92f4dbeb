"""CLI entry point for agenthooks."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler

from agenthooks.cli.output import event_result_to_dict, print_config, print_event_result
from agenthooks.hooks.config import load_hooks_config
from agenthooks.hooks.events import STOP_REASONS
from agenthooks.hooks.manager import HookManager
from agenthooks.types.hooks import HookEventName, HookEventResult

BLOCKED_EXIT_CODE = 2


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(verbose: bool) -> None:
    """agenthooks -- run lifecycle hooks for coding agents.

    \b
    Usage:
      agenthooks list
      agenthooks paths
      agenthooks run PreToolUse --tool-name Bash --tool-input '{"command": "ls"}'
      agenthooks run UserPromptSubmit --message "fix the bug"
      agenthooks config list
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, show_time=False)],
    )


@cli.command("list")
@click.option("--cwd", default=None, help="Project directory (default: current)")
@click.option("--json", "as_json", is_flag=True, help="Print the merged config as JSON")
def list_cmd(cwd: str | None, as_json: bool) -> None:
    """Show the merged hook configuration."""
    config = load_hooks_config(Path(cwd) if cwd else Path.cwd())
    if as_json:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return
    print_config(config)


@cli.command("run")
@click.argument("event", type=click.Choice([e.value for e in HookEventName]))
@click.option("--cwd", default=None, help="Project directory (default: current)")
@click.option("--session", "-s", "session_id", default="", help="Session ID sent to hooks")
@click.option("--tool-name", default=None, help="Tool name (PreToolUse/PostToolUse)")
@click.option("--tool-input", default="{}", help="Tool input as JSON")
@click.option("--tool-output", default=None, help="Tool output (PostToolUse)")
@click.option("--tool-error", is_flag=True, help="Mark the tool call as failed (PostToolUse)")
@click.option("--message", default=None, help="User message (UserPromptSubmit) or assistant message (Stop)")
@click.option("--stop-reason", type=click.Choice(STOP_REASONS), default="complete", help="Stop reason (Stop)")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def run_cmd(
    event: str,
    cwd: str | None,
    session_id: str,
    tool_name: str | None,
    tool_input: str,
    tool_output: str | None,
    tool_error: bool,
    message: str | None,
    stop_reason: str,
    as_json: bool,
) -> None:
    """Fire EVENT against the configured hooks.

    Exits with code 2 when a hook blocks the event.
    """
    hook_event = HookEventName(event)
    project_dir = Path(cwd).resolve() if cwd else Path.cwd()

    parsed_input: Any = None
    if hook_event in (HookEventName.PRE_TOOL_USE, HookEventName.POST_TOOL_USE):
        if not tool_name:
            raise click.UsageError(f"--tool-name is required for {event}")
        try:
            parsed_input = json.loads(tool_input)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--tool-input") from exc

    manager = HookManager(project_dir, session_id)
    result = asyncio.run(
        _dispatch(
            manager, hook_event,
            tool_name=tool_name or "",
            tool_input=parsed_input,
            tool_output=tool_output,
            tool_error=tool_error,
            message=message,
            stop_reason=stop_reason,
        )
    )

    if as_json:
        click.echo(json.dumps(event_result_to_dict(result), indent=2))
    else:
        print_event_result(event, result)

    if not result.allowed:
        sys.exit(BLOCKED_EXIT_CODE)


async def _dispatch(
    manager: HookManager,
    event: HookEventName,
    *,
    tool_name: str,
    tool_input: Any,
    tool_output: str | None,
    tool_error: bool,
    message: str | None,
    stop_reason: str,
) -> HookEventResult:
    match event:
        case HookEventName.PRE_TOOL_USE:
            return await manager.run_pre_tool_use(tool_name, tool_input)
        case HookEventName.POST_TOOL_USE:
            return await manager.run_post_tool_use(tool_name, tool_input, tool_output, tool_error)
        case HookEventName.USER_PROMPT_SUBMIT:
            return await manager.run_user_prompt_submit(message or "")
        case HookEventName.STOP:
            return await manager.run_stop(message, stop_reason)
        case HookEventName.SESSION_START:
            return await manager.run_session_start()
        case HookEventName.SESSION_END:
            return await manager.run_session_end()


def _register_subcommands() -> None:
    """Register CLI subcommands."""
    from agenthooks.cli.commands import config_cmd, paths_cmd

    cli.add_command(config_cmd, "config")
    cli.add_command(paths_cmd, "paths")


_register_subcommands()


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
