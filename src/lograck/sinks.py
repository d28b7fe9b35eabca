"""
Log sink abstractions and concrete implementations.

Every sink is built with an identity tag (``id``), the name of the logger it
serves, plus its own keyword parameters. Sinks are owned by one logger and
released through ``close()``.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from structlog.typing import EventDict

from .formatters import ConsoleFormatter, orjson_dumps

if TYPE_CHECKING:
    from google.cloud.logging import Client as GCloudLoggingClient

LogFormat = Literal["console", "json"]


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    Subclasses set ``name``; a logger indexes its sinks by it, so two sinks of
    the same type cannot be attached to one logger unless one is renamed.
    """

    name: ClassVar[str] = "sink"

    def __init__(self, *, id: str | None = None, name: str | None = None):
        self.id = id
        if name:
            self.name = name  # type: ignore[misc]

    def tag(self, event_dict: EventDict) -> EventDict:
        """Return a copy of the event carrying this sink's identity tag."""
        tagged = dict(event_dict)
        if self.id is not None:
            tagged["sink_id"] = self.id
        return tagged

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, id={self.id!r})"


class ConsoleSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (human-readable) or "json"
        stream: Output stream (default: stderr)
        colorize: Force ANSI colors on or off; defaults to ``stream.isatty()``
    """

    name = "console"

    def __init__(
        self,
        fmt: LogFormat = "console",
        stream: Any = None,
        colorize: bool | None = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self._fmt = fmt
        self._stream = stream
        self._colorize = colorize

    @property
    def stream(self) -> Any:
        # Resolved late so that pytest's capsys and redirected stderr are honoured
        return self._stream or sys.stderr

    def emit(self, event_dict: EventDict) -> None:
        event = self.tag(event_dict)
        stream = self.stream
        if self._fmt == "json":
            output = orjson_dumps(event)
        else:
            use_color = self._colorize
            if use_color is None:
                use_color = bool(getattr(stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event, use_color=use_color)

        stream.write(output + "\n")
        stream.flush()

    def close(self) -> None:
        # The stream is not ours to close
        if self._stream is not None:
            self._stream.flush()


class FileSink(BaseSink):
    """Local file sink with size-based rotation (JSON lines)."""

    name = "file"

    def __init__(
        self,
        filename: str | Path,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self._path = Path(filename)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._max_bytes = max_bytes
        self._backup_count = backup_count
        self._file = open(self._path, "a", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def emit(self, event_dict: EventDict) -> None:
        if self._file.closed:
            return
        self._file.write(orjson_dumps(self.tag(event_dict)) + "\n")
        self._file.flush()
        self._maybe_rotate()

    def _backup(self, index: int) -> Path:
        return self._path.with_name(f"{self._path.name}.{index}")

    def _maybe_rotate(self) -> None:
        if self._max_bytes <= 0 or self._path.stat().st_size <= self._max_bytes:
            return
        self._file.close()
        if self._backup_count > 0:
            oldest = self._backup(self._backup_count)
            if oldest.exists():
                oldest.unlink()
            for i in range(self._backup_count - 1, 0, -1):
                src = self._backup(i)
                if src.exists():
                    src.rename(self._backup(i + 1))
            self._path.rename(self._backup(1))
        else:
            self._path.unlink()
        self._file = open(self._path, "a", encoding="utf-8")

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class MemorySink(BaseSink):
    """Keeps emitted events in ``records``; handy for tests and inspection."""

    name = "memory"

    def __init__(self, limit: int | None = None, **kwargs: Any):
        super().__init__(**kwargs)
        self._limit = limit
        self.records: list[EventDict] = []
        self.closed = False

    def emit(self, event_dict: EventDict) -> None:
        if self.closed:
            return
        self.records.append(self.tag(event_dict))
        if self._limit is not None and len(self.records) > self._limit:
            del self.records[: len(self.records) - self._limit]

    @property
    def messages(self) -> list[str]:
        return [str(r.get("message", r.get("event", ""))) for r in self.records]

    def close(self) -> None:
        self.closed = True


class GCloudSink(BaseSink):
    """Google Cloud Logging sink for production."""

    name = "gcloud"

    _SEVERITIES = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    def __init__(self, project_id: str | None = None, log_name: str = "lograck", **kwargs: Any):
        super().__init__(**kwargs)
        self._client: GCloudLoggingClient | None = None
        self._logger = None
        try:
            from google.cloud import logging as gcloud_logging

            self._client = gcloud_logging.Client(project=project_id)
            self._logger = self._client.logger(log_name)
            self._available = True
        except Exception:
            self._available = False

    @property
    def available(self) -> bool:
        return self._available

    def emit(self, event_dict: EventDict) -> None:
        if not self._available or not self._logger:
            return
        level = str(event_dict.get("level", "INFO")).upper()
        severity = level if level in self._SEVERITIES else "DEFAULT"
        self._logger.log_struct(self.tag(event_dict), severity=severity)

    def close(self) -> None:
        if self._available and self._client:
            self._client.close()
            self._available = False
