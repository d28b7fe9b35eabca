"""
Line rendering for sinks: aligned console columns and JSON lines.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson
from structlog.typing import EventDict

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
}

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI color when enabled."""
    code = COLORS.get(color) or LEVEL_COLORS.get(color)
    if not enabled or not code:
        return text
    return f"{code}{text}{COLORS['reset']}"


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(
        v,
        default=default if default is not None else str,
        option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC,
    ).decode()


class ConsoleFormatter:
    """Renders an event dict as ``time | LEVEL | [id] logger | message k=v``."""

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "sink_id"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 24
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if len(text) > width:
            text = "..." + text[-(width - 3) :] if width > 3 else text[-width:]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw: str | None) -> str:
        if raw:
            try:
                dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = False) -> str:
        level = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "root"))
        sink_id = event_dict.get("sink_id")
        if sink_id and sink_id != logger_name:
            logger_name = f"[{sink_id}] {logger_name}"

        extras = [
            f"{colorize(k, 'key', use_color)}={colorize(str(v), 'dim', use_color)}"
            for k, v in event_dict.items()
            if k not in cls.EXCLUDED_KEYS
        ]
        if extras:
            message = f"{message} " + " ".join(extras)

        return cls.SEPARATOR.join(
            [
                colorize(cls._format_timestamp(event_dict.get("timestamp")), "timestamp", use_color),
                colorize(cls._fit_right(level, cls.LEVEL_WIDTH), level, use_color),
                colorize(cls._fit_right(logger_name, cls.LOGGER_WIDTH), "logger", use_color),
                message,
            ]
        )
