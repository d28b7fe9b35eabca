"""
Named logger: one structlog processor chain fanned out to a set of sinks.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger

from .core import NOP_FILE, add_timestamp, get_logger, level_number, rename_event_key
from .errors import SinkAlreadyAttachedError
from .sinks import BaseSink, ConsoleSink

_log = get_logger("lograck.logger")


class Logger:
    """A named logger owning its sinks.

    ``sinks`` maps sink name to sink in attachment order and ``sink_names``
    mirrors its keys. Both may be replaced wholesale by ``share_sinks``, in
    which case the sinks are borrowed and ``close()`` leaves them open.

    Args:
        name: Logger name, also used as the default sink identity tag.
        sinks: Sinks to attach, in order.
        level: Minimum level name ("debug", "info", ...).
        parent_logger: When true and no sinks are given, attach a console sink.
    """

    def __init__(
        self,
        name: str,
        *,
        sinks: Optional[Iterable[BaseSink]] = None,
        level: str = "info",
        parent_logger: bool = True,
    ) -> None:
        self.name = name
        self.level = level
        self.sinks: Dict[str, BaseSink] = {}
        self.sink_names: List[str] = []
        self._borrowed = False
        self._closed = False

        for sink in sinks or ():
            self.add(sink)
        if parent_logger and not self.sinks:
            self.add(ConsoleSink(id=name))

        self._bound = structlog.wrap_logger(
            structlog.PrintLogger(file=NOP_FILE),
            processors=[
                structlog.stdlib.add_log_level,
                add_timestamp,
                self._add_logger_name,
                rename_event_key,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                self._fan_out,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(level_number(level)),
            context_class=dict,
            cache_logger_on_first_use=False,
        )

    # =========================================================================
    # Sink management
    # =========================================================================

    @property
    def shares_sinks(self) -> bool:
        return self._borrowed

    def _unshare(self) -> None:
        # Stop aliasing the lender's containers before mutating them
        if self._borrowed:
            self.sinks = dict(self.sinks)
            self.sink_names = list(self.sink_names)

    def add(self, sink: BaseSink) -> "Logger":
        """Attach ``sink``. Once any sink is added the logger owns all of them."""
        if sink.name in self.sinks:
            raise SinkAlreadyAttachedError(logger_name=self.name, sink_name=sink.name)
        if self._borrowed:
            # Mixing borrowed and owned sinks is not supported: drop the borrowed ones
            self.sinks = {}
            self.sink_names = []
            self._borrowed = False
        self.sinks[sink.name] = sink
        self.sink_names.append(sink.name)
        self._closed = False
        return self

    def remove(self, name: str) -> "Logger":
        """Detach the sink called ``name``, closing it if owned. Unknown names are ignored."""
        if name not in self.sinks:
            return self
        borrowed = self._borrowed
        self._unshare()
        sink = self.sinks.pop(name)
        self.sink_names.remove(name)
        if not borrowed:
            sink.close()
        return self

    def share_sinks(self, sinks: Dict[str, BaseSink]) -> None:
        """Borrow ``sinks`` by reference; they stay open when this logger closes."""
        if not self._borrowed:
            for sink in self.sinks.values():
                sink.close()
        self.sinks = sinks
        self.sink_names = list(sinks)
        self._borrowed = True

    # =========================================================================
    # Logging
    # =========================================================================

    def _add_logger_name(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("logger", self.name)
        return event_dict

    def _fan_out(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        """Emit to every attached sink. Returns empty to suppress default output."""
        for sink in list(self.sinks.values()):
            try:
                sink.emit(event_dict)
            except Exception:
                pass  # A broken sink must not break the caller
        return ""

    def bind(self, **values: Any) -> Any:
        """A structlog bound logger carrying ``values`` in every event."""
        return self._bound.bind(**values)

    def log(self, level: str | int, event: str, **kw: Any) -> None:
        self._bound.log(level_number(level), event, **kw)

    def debug(self, event: str, **kw: Any) -> None:
        self._bound.debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._bound.info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._bound.warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._bound.error(event, **kw)

    def critical(self, event: str, **kw: Any) -> None:
        self._bound.critical(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        self._bound.exception(event, **kw)

    # =========================================================================
    # Shutdown
    # =========================================================================

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close owned sinks and detach everything. Safe to call twice.

        Every owned sink is closed even if an earlier one fails; the first
        failure is re-raised once the logger is fully detached.
        """
        first_error: Optional[BaseException] = None
        try:
            if not self._borrowed:
                for sink in list(self.sinks.values()):
                    try:
                        sink.close()
                    except Exception as exc:
                        if first_error is None:
                            first_error = exc
        finally:
            self.sinks = {}
            self.sink_names = []
            self._borrowed = False
            if not self._closed:
                _log.debug("logger_closed", logger=self.name)
            self._closed = True
        if first_error is not None:
            raise first_error

    def __repr__(self) -> str:
        return f"Logger(name={self.name!r}, sinks={self.sink_names!r})"
