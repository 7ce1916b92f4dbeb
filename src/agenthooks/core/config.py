"""Settings loading (env vars, .env)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

HOOKS_DIR_NAME = ".agenthooks"
HOOKS_FILE_NAME = "hooks.json"
HOOK_EVENT_ENV_VAR = "AGENTHOOKS_HOOK_EVENT"

DEFAULT_TIMEOUT_MS = 10_000


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    if home := os.environ.get("AGENTHOOKS_HOME"):
        config["home"] = home
    if (timeout := _env_timeout_ms()) is not None:
        config["default_timeout_ms"] = timeout

    return config


def hooks_home() -> Path:
    """Directory holding the global hooks file."""
    if home := os.environ.get("AGENTHOOKS_HOME"):
        return Path(home).expanduser()
    return Path.home() / HOOKS_DIR_NAME


def default_timeout_ms() -> int:
    """Timeout applied to hooks that do not set their own."""
    timeout = _env_timeout_ms()
    return timeout if timeout is not None else DEFAULT_TIMEOUT_MS


def _env_timeout_ms() -> int | None:
    raw = os.environ.get("AGENTHOOKS_DEFAULT_TIMEOUT_MS")
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid AGENTHOOKS_DEFAULT_TIMEOUT_MS=%r", raw)
        return None
    if value <= 0:
        logger.warning("Ignoring non-positive AGENTHOOKS_DEFAULT_TIMEOUT_MS=%r", raw)
        return None
    return value
