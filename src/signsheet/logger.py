"""Structured JSON logger for signsheet.

Each record is one JSON object per line:
{"time":"2026-10-17T09:12:03.114820+09:00","level":"INFO","source":{"function":"extract_page_text","file":".../extraction.py","line":71},"msg":"page text extracted","page_number":1,"items":42}
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

# Per-request fields (e.g. request_id, document name)
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class StructuredFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.now(timezone.utc).astimezone().isoformat(),
            "level": record.levelname,
            "source": {
                "function": record.funcName,
                "file": record.pathname,
                "line": record.lineno,
            },
            "msg": record.getMessage(),
        }

        ctx_fields = _log_context.get()
        if ctx_fields:
            entry.update(ctx_fields)

        if hasattr(record, "extra_fields"):
            entry.update(record.extra_fields)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class StructuredLogger:
    """Logger that writes structured JSON lines with context fields."""

    def __init__(self, name: str = "signsheet", level: int = logging.INFO):
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.handlers.clear()

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        self._logger.addHandler(handler)

        self._logger.propagate = False

    @property
    def level(self) -> int:
        return self._logger.level

    def set_level(self, level: int | str) -> None:
        """Change the minimum level, accepting either a name or a logging constant."""
        if isinstance(level, str):
            try:
                level = _LEVELS[level.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {level}") from None
        self._logger.setLevel(level)

    def _log(self, level: int, msg: str, stacklevel: int = 3, **fields: Any) -> None:
        extra = {"extra_fields": fields} if fields else {}
        self._logger.log(level, msg, stacklevel=stacklevel, extra=extra)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, **fields)

    def warn(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log(logging.ERROR, msg, **fields)


def set_context(**fields: Any) -> None:
    """Attach fields to every following log line in the current context.

    Example:
        set_context(request_id="abc-123", document="minutes.pdf")
        logger.info("analysis started")  # includes request_id and document
    """
    current = _log_context.get()
    _log_context.set({**current, **fields})


def clear_context() -> None:
    _log_context.set({})


def get_context() -> dict[str, Any]:
    return _log_context.get().copy()


def configure(level: int | str) -> None:
    """Set the package logger level (called once at startup)."""
    logger.set_level(level)


logger = StructuredLogger("signsheet")
