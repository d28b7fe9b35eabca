"""
Logger options and the merge rules used by the registry.

A plain mapping such as ``{"transports": [...], "file": {...}}`` is turned
into a ``LoggerOptions``: reserved keys fill named fields, every other key is
a sink type name whose value configures one sink of that type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .sinks import BaseSink
from .transports import canonical_name

SINK_LIST_KEYS = ("transports", "sinks")
LEVEL_KEY = "level"
DEFAULT_LEVEL = "info"

# ``True`` enables a sink type with its defaults; ``False``/``None`` disables it
SinkConfig = Union[Mapping[str, Any], bool, None]


@dataclass(frozen=True)
class LoggerOptions:
    """Configuration for one logger.

    Attributes:
        sinks: Pre-built sinks, or ``None`` when unspecified (not the same as empty).
        level: Minimum level name, ``None`` to inherit.
        sink_options: Sink type name -> sink configuration, in declaration order.
    """

    sinks: Optional[Tuple[BaseSink, ...]] = None
    level: Optional[str] = None
    sink_options: Mapping[str, SinkConfig] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if self.sinks is not None and not isinstance(self.sinks, tuple):
            object.__setattr__(self, "sinks", tuple(self.sinks))
        if not isinstance(self.sink_options, MappingProxyType):
            object.__setattr__(self, "sink_options", MappingProxyType(dict(self.sink_options)))

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "LoggerOptions":
        if mapping is None:
            return cls()
        sinks = None
        level = None
        sink_options: Dict[str, SinkConfig] = {}
        for key, value in mapping.items():
            if key in SINK_LIST_KEYS:
                if value is not None:
                    sinks = tuple(value) if sinks is None else sinks + tuple(value)
            elif key == LEVEL_KEY:
                level = value
            else:
                sink_options[key] = value
        return cls(sinks=sinks, level=level, sink_options=sink_options)

    @classmethod
    def coerce(cls, value: Union["LoggerOptions", Mapping[str, Any], None]) -> Optional["LoggerOptions"]:
        if value is None or isinstance(value, LoggerOptions):
            return value
        return cls.from_mapping(value)

    def without_sinks(self) -> "LoggerOptions":
        return LoggerOptions(sinks=None, level=self.level, sink_options=self.sink_options)

    def declares(self, sink_type: str) -> bool:
        """Whether a key names ``sink_type``, enabled or not."""
        wanted = canonical_name(sink_type)
        return any(canonical_name(key) == wanted for key in self.sink_options)

    def enabled_sink_options(self) -> Dict[str, Mapping[str, Any]]:
        """Sink configurations that should be built, ``True`` expanded to ``{}``."""
        enabled: Dict[str, Mapping[str, Any]] = {}
        for key, config in self.sink_options.items():
            if config is None or config is False:
                continue
            enabled[key] = {} if config is True else config
        return enabled


def merge_options(override: Optional[LoggerOptions], base: Optional[LoggerOptions]) -> LoggerOptions:
    """Merge per-logger options over the registry's base options.

    Precedence, field by field:
      - ``sinks``: override, then base, then unset.
      - ``level``: override, then base, then ``"info"``.
      - ``sink_options``: the override's as a whole when an override is given,
        otherwise the base's.

    Neither argument is modified.
    """
    base = base or LoggerOptions()
    if override is None:
        return LoggerOptions(
            sinks=base.sinks,
            level=base.level or DEFAULT_LEVEL,
            sink_options=base.sink_options,
        )
    return LoggerOptions(
        sinks=override.sinks if override.sinks is not None else base.sinks,
        level=override.level or base.level or DEFAULT_LEVEL,
        sink_options=override.sink_options,
    )
