"""Rich-powered rendering of hook configs and dispatch results."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from agenthooks.hooks.executor import effective_timeout_ms
from agenthooks.types.hooks import HookEventResult, HookResult, HooksConfig, is_blocking_event

# ── Palette ──────────────────────────────────────────────────────────────────
STYLE_EVENT = "bold #a78bfa"          # violet
STYLE_DETAIL = "#7c7c8a"              # muted grey
STYLE_COMMAND = "bold #e2e8f0"
STYLE_OK = "bold #34d399"             # green
STYLE_WARN = "bold #fbbf24"           # amber
STYLE_BLOCK = "bold #f87171"          # red
STYLE_CONTEXT = "italic #94a3b8"


def print_config(config: HooksConfig, console: Console | None = None) -> None:
    """Print the merged hook config as a table."""
    console = console or Console()
    if config.is_empty:
        console.print("No hooks configured.", style=STYLE_DETAIL)
        return

    table = Table(show_header=True, header_style="bold", expand=False)
    table.add_column("Event", style=STYLE_EVENT, no_wrap=True)
    table.add_column("#", justify="right", style=STYLE_DETAIL)
    table.add_column("Command", style=STYLE_COMMAND, overflow="fold")
    table.add_column("Matcher", style=STYLE_DETAIL)
    table.add_column("Timeout", justify="right", style=STYLE_DETAIL)
    table.add_column("Description")

    for event, hooks in config.items():
        kind = "blocking" if is_blocking_event(event) else "advisory"
        for i, hook in enumerate(hooks, 1):
            matcher = hook.matcher.tool_name if hook.matcher and hook.matcher.tool_name else "*"
            table.add_row(
                f"{event.value} ({kind})" if i == 1 else "",
                str(i),
                hook.command,
                matcher,
                f"{effective_timeout_ms(hook)}ms",
                hook.description or "",
            )

    console.print(table)


def print_paths(paths: dict[str, Path], console: Console | None = None) -> None:
    console = console or Console()
    for source, path in paths.items():
        state = Text("found", style=STYLE_OK) if path.is_file() else Text("missing", style=STYLE_DETAIL)
        line = Text(f"{source:<8} ", style="bold")
        line.append(str(path))
        line.append("  ")
        line.append_text(state)
        console.print(line)


def print_event_result(
    event: str, result: HookEventResult, console: Console | None = None,
) -> None:
    """Print a dispatch outcome as a panel."""
    console = console or Console()
    body = Text()

    if not result.results:
        body.append("No matching hooks.", style=STYLE_DETAIL)
    for hook_result in result.results:
        body.append_text(_result_line(hook_result))
        body.append("\n")

    for warning in result.warnings:
        body.append("warning ", style=STYLE_WARN)
        body.append(f"{warning}\n")

    if result.additional_context:
        body.append("context ", style="bold")
        body.append(f"{result.additional_context}\n", style=STYLE_CONTEXT)

    if result.allowed:
        title, border = f"{event}: allowed", STYLE_OK
    else:
        body.append("blocked ", style=STYLE_BLOCK)
        body.append(result.block_reason or "")
        title, border = f"{event}: blocked", STYLE_BLOCK

    console.print(Panel(body, title=title, border_style=border, expand=False))


def _result_line(result: HookResult) -> Text:
    line = Text()
    if result.timed_out:
        line.append("timeout ", style=STYLE_WARN)
    elif result.exit_code == 0:
        line.append("ok      ", style=STYLE_OK)
    else:
        line.append(f"exit {result.exit_code:<3}", style=STYLE_WARN)
    line.append(result.hook.label, style=STYLE_COMMAND)
    line.append(f"  {result.duration_ms}ms", style=STYLE_DETAIL)
    return line


def event_result_to_dict(result: HookEventResult) -> dict[str, Any]:
    """JSON-serializable view of a dispatch outcome."""
    data: dict[str, Any] = {
        "allowed": result.allowed,
        "results": [
            {
                "hook": r.hook.to_dict(),
                "exitCode": r.exit_code,
                "stdout": r.stdout.raw if r.stdout is not None else None,
                "stderr": r.stderr,
                "timedOut": r.timed_out,
                "durationMs": r.duration_ms,
            }
            for r in result.results
        ],
        "warnings": list(result.warnings),
    }
    if result.block_reason is not None:
        data["blockReason"] = result.block_reason
    if result.additional_context is not None:
        data["additionalContext"] = result.additional_context
    return data
