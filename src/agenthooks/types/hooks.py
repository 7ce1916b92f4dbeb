"""Hook types for the agenthooks event system."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class HookEventName(str, Enum):
    """Lifecycle events that can trigger hooks.

    Values are the literal keys used in ``hooks.json`` and the
    ``hook_event_name`` field of the request payload.
    """

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    STOP = "Stop"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    SESSION_START = "SessionStart"
    SESSION_END = "SessionEnd"

    @classmethod
    def parse(cls, value: HookEventName | str) -> HookEventName | None:
        """Return the member for *value*, or None if it is not a known event."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Events whose hooks can veto the action that triggered them.
BLOCKING_EVENTS: frozenset[HookEventName] = frozenset({
    HookEventName.PRE_TOOL_USE,
    HookEventName.USER_PROMPT_SUBMIT,
    HookEventName.STOP,
})

TOOL_EVENTS: frozenset[HookEventName] = frozenset({
    HookEventName.PRE_TOOL_USE,
    HookEventName.POST_TOOL_USE,
})


def is_blocking_event(event: HookEventName | str) -> bool:
    """Classify an event as blocking (True) or advisory (False)."""
    return HookEventName.parse(event) in BLOCKING_EVENTS


@dataclass(frozen=True, slots=True)
class HookMatcher:
    """Filter restricting which invocations a hook applies to."""

    tool_name: str | None = None  # Regex searched in the tool name


@dataclass(frozen=True, slots=True)
class HookDefinition:
    """A hook that runs a shell command on an event."""

    command: str
    matcher: HookMatcher | None = None
    timeout: int | None = None  # Milliseconds
    description: str | None = None
    type: str = "command"

    @property
    def label(self) -> str:
        """Name used when reporting on this hook."""
        return self.description or self.command

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "command": self.command}
        if self.matcher is not None:
            data["matcher"] = (
                {"tool_name": self.matcher.tool_name}
                if self.matcher.tool_name is not None else {}
            )
        if self.timeout is not None:
            data["timeout"] = self.timeout
        if self.description is not None:
            data["description"] = self.description
        return data


class HooksConfig(Mapping[HookEventName, tuple[HookDefinition, ...]]):
    """Immutable mapping of event name to its ordered hook list.

    Events with no hooks are never stored, so ``event in config`` means at
    least one hook is configured for it.  Iteration follows the declaration
    order of :class:`HookEventName`.
    """

    __slots__ = ("_hooks",)

    def __init__(
        self,
        hooks: Mapping[HookEventName | str, Iterable[HookDefinition]] | None = None,
    ) -> None:
        normalized: dict[HookEventName, tuple[HookDefinition, ...]] = {}
        raw = dict(hooks or {})
        for event in HookEventName:
            entries = raw.get(event, raw.get(event.value, ()))
            entries = tuple(entries)
            if entries:
                normalized[event] = entries
        self._hooks = MappingProxyType(normalized)

    def __getitem__(self, event: HookEventName) -> tuple[HookDefinition, ...]:
        return self._hooks[event]

    def __iter__(self) -> Iterator[HookEventName]:
        return iter(self._hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def __repr__(self) -> str:
        counts = ", ".join(f"{e.value}={len(h)}" for e, h in self._hooks.items())
        return f"HooksConfig({counts})"

    @property
    def is_empty(self) -> bool:
        return not self._hooks

    def hooks_for(self, event: HookEventName | str) -> tuple[HookDefinition, ...]:
        """Return the hooks for *event*, or an empty tuple."""
        parsed = HookEventName.parse(event)
        if parsed is None:
            return ()
        return self._hooks.get(parsed, ())

    def merged_with(self, other: HooksConfig) -> HooksConfig:
        """Append *other*'s hooks after this config's hooks, event by event."""
        return HooksConfig({
            event: self.hooks_for(event) + other.hooks_for(event)
            for event in HookEventName
        })

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            event.value: [hook.to_dict() for hook in hooks]
            for event, hooks in self._hooks.items()
        }


# Request payload written to a hook's stdin.  Always carries
# ``hook_event_name`` and ``cwd``; the rest depends on the event.
HookStdin = dict[str, Any]


@dataclass(frozen=True, slots=True)
class HookStdout:
    """Parsed JSON response a hook wrote to stdout."""

    reason: str | None = None
    additional_context: str | None = None
    decision: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> HookStdout:
        def _str(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) else None

        return cls(
            reason=_str("reason"),
            additional_context=_str("additionalContext"),
            decision=_str("decision"),
            raw=dict(data),
        )


@dataclass(frozen=True, slots=True)
class HookResult:
    """Outcome of one hook execution."""

    hook: HookDefinition
    exit_code: int
    stdout: HookStdout | None = None
    stderr: str | None = None
    timed_out: bool = False
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


@dataclass(frozen=True, slots=True)
class HookEventResult:
    """Outcome of dispatching one lifecycle event to its hooks.

    Two shapes exist: *completed* (``allowed=True``, every matched hook ran)
    and *blocked* (``allowed=False``, ``block_reason`` set, ``results`` holds
    only the hooks that ran up to and including the blocker).
    """

    allowed: bool
    block_reason: str | None = None
    additional_context: str | None = None
    results: tuple[HookResult, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def completed(
        cls,
        *,
        results: Iterable[HookResult] = (),
        warnings: Iterable[str] = (),
        additional_context: str | None = None,
    ) -> HookEventResult:
        return cls(
            allowed=True,
            additional_context=additional_context,
            results=tuple(results),
            warnings=tuple(warnings),
        )

    @classmethod
    def blocked(
        cls,
        reason: str,
        *,
        results: Iterable[HookResult] = (),
        warnings: Iterable[str] = (),
        additional_context: str | None = None,
    ) -> HookEventResult:
        return cls(
            allowed=False,
            block_reason=reason,
            additional_context=additional_context,
            results=tuple(results),
            warnings=tuple(warnings),
        )

    @property
    def is_blocked(self) -> bool:
        return not self.allowed
