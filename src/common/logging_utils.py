"""Centralized logging helpers.

Configures the root logger once from the environment and provides small
helpers for structured DEBUG records so callers avoid building ``extra``
payloads when DEBUG is off.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_ATTR = "_getversion_handler"


def _level_from_env() -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[int] = None) -> None:
    """Configure the root logger with a single console handler.

    Safe to call more than once; the handler is only installed the first time
    while the level is re-applied on every call.
    """
    root = logging.getLogger()
    if not any(getattr(h, _HANDLER_ATTR, False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)
    root.setLevel(level if level is not None else _level_from_env())


def add_file_handler(path: str) -> logging.Handler:
    """Attach a timestamped file handler to the root logger."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def is_debug_mode() -> bool:
    """Return True when the process-wide ``DEBUG_MODE`` flag is set."""
    return os.environ.get(Constants.ENV_DEBUG_MODE, "").strip().lower() == "true"


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {key: value for key, value in fields.items() if value is not None}
