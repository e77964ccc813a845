"""
Logging Context and Shared State.

The request id lives in a ContextVar so every log line emitted while
handling a request carries the same id, whether the handler runs on the
event loop or in FastAPI's thread pool.

Level and configuration flags are process-wide module state.

Environment Variables:
    - NAIJAVOICE_LOG_LEVEL: Log level (1-4 or name)
    - NAIJAVOICE_LOG_DIR: Directory for the JSONL log file
    - NAIJAVOICE_JSONL_FILE: JSONL filename
    - NAIJAVOICE_LOG_ROTATE_BYTES: Max file size before rotation
    - NAIJAVOICE_LOG_ROTATE_BACKUP: Rotated files to keep
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

import yaml

from .levels import LEVEL_NAMES, LogLevel

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Request id of the current context, "-" outside a request."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """Bind a request id to the current context."""
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Current level as a display name ("NORMAL", "DEBUG", ...)."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def _env_int(name: str) -> int | None:
    value = os.getenv(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def read_logging_config() -> Dict[str, Any]:
    """
    Resolve logging options from the settings file and the environment.

    Environment variables win over the `logging:` section of the settings
    file. A settings file that fails to parse is ignored here; the service
    reports it properly when it loads its own configuration.
    """
    from naijavoice.core.config import load_settings

    cfg: Dict[str, Any] = {}

    try:
        settings = load_settings()
        cfg.update(settings.raw.get("logging", {}) or {})
    except (OSError, yaml.YAMLError, ValueError):
        pass

    if os.getenv("NAIJAVOICE_LOG_LEVEL"):
        cfg["level"] = os.environ["NAIJAVOICE_LOG_LEVEL"]
    if os.getenv("NAIJAVOICE_LOG_DIR"):
        cfg["log_dir"] = os.environ["NAIJAVOICE_LOG_DIR"]
    if os.getenv("NAIJAVOICE_JSONL_FILE"):
        cfg["jsonl_file"] = os.environ["NAIJAVOICE_JSONL_FILE"]

    rotate_bytes = _env_int("NAIJAVOICE_LOG_ROTATE_BYTES")
    if rotate_bytes is not None:
        cfg["rotate_max_bytes"] = rotate_bytes
    rotate_backup = _env_int("NAIJAVOICE_LOG_ROTATE_BACKUP")
    if rotate_backup is not None:
        cfg["rotate_backup_count"] = rotate_backup

    return cfg
