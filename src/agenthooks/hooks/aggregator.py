"""Event dispatch: run every applicable hook for one lifecycle event.

Hooks run one at a time in configured order (global before project).  On a
blocking event the first hook that exits with code 2 stops the dispatch and
vetoes the action; every other non-zero outcome, and every timeout, is
reported as a warning without affecting control flow.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from agenthooks.hooks.executor import effective_timeout_ms, execute_hook
from agenthooks.hooks.matcher import MatchContext, filter_hooks
from agenthooks.types.hooks import (
    HookDefinition,
    HookEventResult,
    HookResult,
    HookStdin,
    is_blocking_event,
)

logger = logging.getLogger(__name__)

BLOCK_EXIT_CODE = 2


async def run_hooks_for_event(
    hooks: Iterable[HookDefinition],
    stdin: HookStdin,
    match_context: MatchContext | None = None,
) -> HookEventResult:
    """Dispatch *stdin* to every hook in *hooks* that matches *match_context*."""
    applicable = filter_hooks(hooks, match_context)
    if not applicable:
        return HookEventResult.completed()

    event_name = stdin.get("hook_event_name", "")
    blocking = is_blocking_event(event_name)

    results: list[HookResult] = []
    warnings: list[str] = []
    context_parts: list[str] = []

    for hook in applicable:
        result = await execute_hook(hook, stdin)
        results.append(result)

        if result.stdout and result.stdout.additional_context:
            context_parts.append(result.stdout.additional_context)

        if result.timed_out:
            _warn(warnings, f"Hook timed out after {effective_timeout_ms(hook)}ms: {hook.command}")
            continue

        if result.exit_code == BLOCK_EXIT_CODE and blocking:
            reason = _block_reason(result)
            logger.info("%s blocked by hook %s: %s", event_name, hook.label, reason)
            return HookEventResult.blocked(
                reason,
                results=results,
                warnings=warnings,
                additional_context=_join_context(context_parts),
            )

        if result.exit_code == 0:
            continue

        message = result.stderr or f"Hook exited with code {result.exit_code}"
        _warn(warnings, f"{hook.label}: {message}")

    return HookEventResult.completed(
        results=results,
        warnings=warnings,
        additional_context=_join_context(context_parts),
    )


def _block_reason(result: HookResult) -> str:
    if result.stdout and result.stdout.reason:
        return result.stdout.reason
    if result.stderr:
        return result.stderr
    return f"Blocked by hook: {result.hook.label}"


def _warn(warnings: list[str], message: str) -> None:
    logger.warning("%s", message)
    warnings.append(message)


def _join_context(parts: list[str]) -> str | None:
    return "\n".join(parts) if parts else None
