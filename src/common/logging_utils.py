"""Centralized logging helpers.

All entry points call :func:`configure_logging` once; library modules only
create module loggers and use :func:`extra_context` to attach structured
fields to DEBUG records.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_CONFIGURED_ATTR = "_pomcli_configured"


class _ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return base
        fields = " ".join(f"{k}={v}" for k, v in context.items() if v is not None)
        return f"{base} [{fields}]" if fields else base


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger.

    The level comes from ``level`` if given, else from the POMCLI_LOG_LEVEL
    environment variable, else INFO. Repeated calls only adjust the level.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_value)
    if getattr(root, _CONFIGURED_ATTR, False):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
    root.addHandler(handler)
    setattr(root, _CONFIGURED_ATTR, True)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record."""
    return {"context": fields}


def safe_url(url: str) -> str:
    """Strip query string and credentials from a URL before logging it."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urlunsplit((parts.scheme, host, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds; live value while still inside the block."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
