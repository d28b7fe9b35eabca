"""
Sink type resolution.

Maps sink type names (the keys of a logger's options, e.g. ``file`` or
``console``) to sink constructors. Names are stored in canonical form, first
letter upper-cased, so ``file`` and ``File`` resolve to the same entry.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from .core import get_logger
from .errors import SinkRegistrationError, UnknownTransportError
from .sinks import BaseSink, ConsoleSink, FileSink, GCloudSink, MemorySink

SinkFactory = Callable[..., BaseSink]

_log = get_logger("lograck.transports")


def canonical_name(name: object) -> str:
    """``file`` -> ``File``; the rest of the name is left untouched. Non-strings are stringified."""
    text = str(name)
    return text[:1].upper() + text[1:]


class SinkType(Enum):
    """Built-in sink types."""

    CONSOLE = "Console"
    FILE = "File"
    MEMORY = "Memory"
    GCLOUD = "Gcloud"


BUILTIN_SINKS: Dict[SinkType, SinkFactory] = {
    SinkType.CONSOLE: ConsoleSink,
    SinkType.FILE: FileSink,
    SinkType.MEMORY: MemorySink,
    SinkType.GCLOUD: GCloudSink,
}


class SinkTypeRegistry:
    """Explicit table of sink type name -> constructor.

    Validation happens when a type is registered; lookups are plain
    dictionary hits after first-letter canonicalisation.
    """

    def __init__(self, factories: Optional[Mapping[str, SinkFactory]] = None) -> None:
        self._factories: Dict[str, SinkFactory] = {}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    def register(self, name: str, factory: SinkFactory) -> None:
        if not isinstance(name, str) or not name.isidentifier():
            raise SinkRegistrationError(name, "name must be a non-empty identifier")
        if not callable(factory):
            raise SinkRegistrationError(name, "factory is not callable")
        key = canonical_name(name)
        if key in self._factories:
            raise SinkRegistrationError(name, f"'{key}' is already registered")
        self._factories[key] = factory

    def resolve(self, name: str) -> SinkFactory:
        key = canonical_name(name)
        factory = self._factories.get(key)
        if factory is None:
            raise UnknownTransportError(key)
        return factory

    def create(self, name: str, sink_id: str, params: Optional[Mapping[str, Any]] = None) -> BaseSink:
        """Build a sink of type ``name`` tagged with ``sink_id``.

        ``params`` is copied; the caller's mapping never receives the ``id``.
        """
        factory = self.resolve(name)
        kwargs = dict(params or {})
        kwargs["id"] = sink_id
        sink = factory(**kwargs)
        _log.debug("sink_created", sink_type=canonical_name(name), sink_id=sink_id)
        return sink

    def names(self) -> List[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)


def default_sink_types() -> SinkTypeRegistry:
    """A fresh registry holding every built-in sink type."""
    return SinkTypeRegistry({kind.value: factory for kind, factory in BUILTIN_SINKS.items()})
