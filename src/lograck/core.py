"""
Shared structlog processors and the package's own diagnostic logger.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import structlog
from structlog.typing import EventDict, WrappedLogger


def level_number(level: str | int | None, default: int = logging.INFO) -> int:
    """``"warning"`` -> ``logging.WARNING``; ints pass through."""
    if isinstance(level, int):
        return level
    if not level:
        return default
    return getattr(logging, str(level).upper(), default)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Diagnostics logger for lograck internals.

    Routed through the stdlib ``logging`` tree so applications decide where
    (and whether) lograck's own chatter goes.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=False,
    )


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message' so every sink sees the same key."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


class NopFile:
    """Write target for the wrapped PrintLogger; sinks do the real output."""

    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


NOP_FILE = NopFile()
