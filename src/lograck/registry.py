"""
Registry of named loggers.

``Registry.logger(id)`` returns the logger cached under ``id``, building it
on first use from the registry's base options (or the options passed on that
first call). Later calls with the same id return the same instance and ignore
their options.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from .core import get_logger
from .errors import UnknownTransportError
from .logger import Logger
from .options import DEFAULT_LEVEL, LoggerOptions, merge_options
from .sinks import BaseSink, ConsoleSink
from .transports import SinkTypeRegistry, default_sink_types

_log = get_logger("lograck.registry")

OptionsLike = Union[LoggerOptions, Mapping[str, Any], None]
DefaultSinks = Callable[[str], Iterable[BaseSink]]


def console_default(logger_id: str) -> List[BaseSink]:
    """Fallback sink set: one console sink tagged with the logger id."""
    return [ConsoleSink(id=logger_id)]


class Registry:
    """Keyed collection of ``Logger`` instances sharing base options.

    The registry is itself usable as a logger: it owns a base ``Logger``
    holding the sinks passed in ``options`` (its *shared* sinks). Loggers that
    end up with no sinks of their own borrow those shared sinks.

    Args:
        options: Base options. Its sinks become the registry's shared sinks;
            the rest is the default configuration for new loggers.
        sink_types: Sink type table used to resolve option keys.
        default_sinks: Builds the fallback sinks for a logger id.
        name: Name of the registry's own base logger.
    """

    def __init__(
        self,
        options: OptionsLike = None,
        *,
        sink_types: Optional[SinkTypeRegistry] = None,
        default_sinks: DefaultSinks = console_default,
        name: str = "lograck",
    ) -> None:
        base = LoggerOptions.coerce(options) or LoggerOptions()
        self.loggers: Dict[str, Logger] = {}
        self.options = base.without_sinks()
        self.sink_types = sink_types or default_sink_types()
        self.default_sinks = default_sinks
        self._base = Logger(name, sinks=base.sinks, level=base.level or DEFAULT_LEVEL, parent_logger=False)
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "Registry":
        """Build a registry whose base options come from ``RegistrySettings``."""
        return cls(settings.to_options(), **kwargs)

    # =========================================================================
    # Retrieval
    # =========================================================================

    def logger(self, id: str, options: OptionsLike = None) -> Logger:
        """Return the logger for ``id``, creating it on first request.

        Raises:
            ValueError: ``id`` is not a non-empty string.
            UnknownTransportError: ``options`` name an unregistered sink type.
        """
        if not isinstance(id, str) or not id:
            raise ValueError(f"logger id must be a non-empty string, got {id!r}")

        with self._lock:
            existing = self.loggers.get(id)
            if existing is not None:
                return existing
            try:
                created = self._build(id, LoggerOptions.coerce(options))
            except UnknownTransportError as exc:
                _log.warning("unknown_transport", logger_id=id, transport=exc.name)
                raise
            self.loggers[id] = created

        _log.debug("logger_created", logger_id=id, sinks=created.sink_names)
        return created

    get = logger
    add = logger

    def _build(self, id: str, options: Optional[LoggerOptions]) -> Logger:
        effective = merge_options(options, self.options)
        configured = effective.enabled_sink_options()

        # Resolve every name before building anything so a typo opens no files
        for key in configured:
            self.sink_types.resolve(key)

        sinks: List[BaseSink] = list(effective.sinks or ())
        built: List[BaseSink] = []
        try:
            if not sinks and not effective.declares("console") and not self._base.sinks:
                built.extend(self.default_sinks(id))
            for key, params in configured.items():
                built.append(self.sink_types.create(key, id, params))
            sinks.extend(built)
            logger = Logger(id, sinks=sinks, level=effective.level, parent_logger=False)
        except Exception:
            for sink in built:
                sink.close()
            raise

        if self._base.sinks and not sinks:
            logger.share_sinks(self._base.sinks)
        return logger

    def has(self, id: str) -> bool:
        return isinstance(id, str) and id in self.loggers

    def ids(self) -> List[str]:
        return list(self.loggers)

    def __contains__(self, id: object) -> bool:
        return self.has(id)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())

    def __len__(self) -> int:
        return len(self.loggers)

    # =========================================================================
    # Shutdown
    # =========================================================================

    def _close(self, id: str) -> None:
        logger = self.loggers.get(id)
        if logger is None:
            return
        try:
            logger.close()
        except Exception:
            _log.warning("logger_close_failed", logger_id=id, exc_info=True)
        finally:
            del self.loggers[id]

    def close(self, id: Optional[str] = None) -> None:
        """Close the logger ``id``, or every logger and the registry's own sinks."""
        with self._lock:
            if id is not None:
                self._close(id)
                return
            for logger_id in list(self.loggers):
                self._close(logger_id)
            try:
                self._base.close()
            except Exception:
                _log.warning("logger_close_failed", logger_id=self._base.name, exc_info=True)
        _log.debug("registry_closed", logger=self._base.name)

    # =========================================================================
    # Base logger delegation
    # =========================================================================

    @property
    def sinks(self) -> Dict[str, BaseSink]:
        """The registry's shared sinks."""
        return self._base.sinks

    @property
    def base(self) -> Logger:
        return self._base

    def bind(self, **values: Any) -> Any:
        return self._base.bind(**values)

    def log(self, level: Union[str, int], event: str, **kw: Any) -> None:
        self._base.log(level, event, **kw)

    def debug(self, event: str, **kw: Any) -> None:
        self._base.debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._base.info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._base.warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._base.error(event, **kw)

    def critical(self, event: str, **kw: Any) -> None:
        self._base.critical(event, **kw)

    def __repr__(self) -> str:
        return f"Registry(loggers={self.ids()!r}, sinks={self._base.sink_names!r})"
