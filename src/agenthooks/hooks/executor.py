"""Hook process execution.

Runs a hook command through the platform shell and speaks the hook
protocol with it: the request payload goes to stdin as one JSON document,
an optional JSON response comes back on stdout, and the exit code carries
the verdict.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import signal
import sys
import time

from agenthooks.core.config import DEFAULT_TIMEOUT_MS, HOOK_EVENT_ENV_VAR, default_timeout_ms
from agenthooks.types.hooks import HookDefinition, HookResult, HookStdin, HookStdout

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_TIMEOUT_MS", "effective_timeout_ms", "execute_hook"]

# How long to keep draining pipes after a timeout kill.  A grandchild that
# escaped the kill could otherwise hold them open forever.
_DRAIN_GRACE_SEC = 1.0

_IS_WINDOWS = sys.platform == "win32"


def effective_timeout_ms(hook: HookDefinition) -> int:
    """The hook's own timeout, or the configured default."""
    return hook.timeout if hook.timeout is not None else default_timeout_ms()


async def execute_hook(hook: HookDefinition, stdin: HookStdin) -> HookResult:
    """Run one hook and return its result.

    Never raises.  Spawn failures come back as ``exit_code=1`` with the
    error text in ``stderr``; a timeout kills the process and sets
    ``timed_out``.
    """
    timeout_ms = effective_timeout_ms(hook)
    start = time.monotonic()
    event_name = str(stdin.get("hook_event_name", ""))
    env = {**os.environ, HOOK_EVENT_ENV_VAR: event_name}

    logger.debug("Running %s hook (timeout %dms): %s", event_name, timeout_ms, hook.command)

    try:
        payload = json.dumps(stdin, default=str).encode("utf-8")
        proc = await asyncio.create_subprocess_shell(
            hook.command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=stdin.get("cwd") or None,
            env=env,
            start_new_session=not _IS_WINDOWS,
        )
    except (OSError, ValueError) as exc:
        # ValueError: unserializable payload, or a NUL byte in command/cwd.
        logger.warning("Failed to start hook %s: %s", hook.label, exc)
        return HookResult(
            hook=hook,
            exit_code=1,
            stderr=str(exc),
            timed_out=False,
            duration_ms=_elapsed_ms(start),
        )

    readers = [
        asyncio.ensure_future(proc.stdout.read()),
        asyncio.ensure_future(proc.stderr.read()),
    ]

    async def _run() -> None:
        await _write_request(proc, payload)
        await proc.wait()
        await asyncio.wait(readers)

    timed_out = False
    try:
        await asyncio.wait_for(_run(), timeout=timeout_ms / 1000.0)
    except TimeoutError:
        timed_out = True
        logger.debug("Hook timed out after %dms, killing: %s", timeout_ms, hook.command)
        _kill(proc)
        await proc.wait()
        _, pending = await asyncio.wait(readers, timeout=_DRAIN_GRACE_SEC)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    stdout_text = _decode(readers[0])
    stderr_text = _decode(readers[1])

    exit_code = proc.returncode
    if exit_code is None or exit_code < 0:
        # Killed by a signal: there is no exit status to report.
        exit_code = 1

    result = HookResult(
        hook=hook,
        exit_code=exit_code,
        stdout=_parse_stdout(stdout_text, hook),
        stderr=stderr_text.strip() or None,
        timed_out=timed_out,
        duration_ms=_elapsed_ms(start),
    )
    logger.debug(
        "Hook finished with exit code %d in %dms: %s",
        result.exit_code, result.duration_ms, hook.command,
    )
    return result


async def _write_request(proc: asyncio.subprocess.Process, payload: bytes) -> None:
    """Send the request and close stdin.  Write failures are not fatal."""
    if proc.stdin is None:
        return
    try:
        proc.stdin.write(payload)
        await proc.stdin.drain()
    except (BrokenPipeError, ConnectionResetError) as exc:
        logger.debug("Hook stdin write failed: %s", exc)
    finally:
        proc.stdin.close()


def _kill(proc: asyncio.subprocess.Process) -> None:
    """SIGKILL the hook, including anything it spawned on POSIX."""
    try:
        if _IS_WINDOWS:
            proc.kill()
        else:
            os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except PermissionError:
        # macOS refuses killpg once the group leader is a zombie.
        try:
            proc.kill()
        except ProcessLookupError:
            pass


def _decode(task: asyncio.Future[bytes]) -> str:
    if not task.done() or task.cancelled() or task.exception() is not None:
        return ""
    return task.result().decode("utf-8", errors="replace")


def _parse_stdout(text: str, hook: HookDefinition) -> HookStdout | None:
    text = text.strip()
    if not text:
        return None
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        logger.debug("Hook stdout is not JSON, ignoring: %s", hook.command)
        return None
    if not isinstance(data, dict):
        return None
    return HookStdout.from_json(data)


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.monotonic() - start) * 1000))
