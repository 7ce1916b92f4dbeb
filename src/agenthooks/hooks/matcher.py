"""Hook matching against an invocation context."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from agenthooks.types.hooks import HookDefinition

logger = logging.getLogger(__name__)

MatchContext = Mapping[str, Any]


def matches_hook(hook: HookDefinition, context: MatchContext | None = None) -> bool:
    """Check if a hook applies to the given context.

    A hook without a matcher (or with an empty one) always applies.  A
    ``tool_name`` matcher is a regex searched in ``context["tool_name"]``;
    it never matches when the context has no tool name or the pattern is
    invalid.
    """
    if hook.matcher is None or not hook.matcher.tool_name:
        return True

    tool_name = (context or {}).get("tool_name")
    if not tool_name:
        return False

    try:
        return re.search(hook.matcher.tool_name, str(tool_name)) is not None
    except re.error:
        logger.warning("Invalid regex in hook matcher: %s", hook.matcher.tool_name)
        return False


def filter_hooks(
    hooks: Iterable[HookDefinition], context: MatchContext | None = None,
) -> list[HookDefinition]:
    """Return the hooks that match *context*, preserving order."""
    return [hook for hook in hooks if matches_hook(hook, context)]
