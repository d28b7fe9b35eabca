"""
lograck: a registry of named loggers.

Each logger has its own sinks (console, file, memory, gcloud), built from
declarative options the first time its id is requested:

    from lograck import Registry

    registry = Registry({"console": {"fmt": "json"}})
    api = registry.logger("api", {"file": {"filename": "logs/api.log"}})
    api.info("started", port=8080)
    registry.close()

Library: structlog for the processor chain, orjson for JSON lines,
pydantic-settings for environment configuration.
"""

from typing import Any, Optional

from .config import RegistrySettings
from .errors import LogRackError, SinkAlreadyAttachedError, SinkRegistrationError, UnknownTransportError
from .logger import Logger
from .options import LoggerOptions, merge_options
from .registry import Registry
from .sinks import BaseSink, ConsoleSink, FileSink, GCloudSink, MemorySink
from .transports import SinkType, SinkTypeRegistry, default_sink_types

# Process-wide registry
loggers = Registry()


def get(id: str, options: Any = None) -> Logger:
    """Logger ``id`` from the process-wide registry."""
    return loggers.logger(id, options)


def has(id: str) -> bool:
    return loggers.has(id)


def close(id: Optional[str] = None) -> None:
    loggers.close(id)


__all__ = [
    "BaseSink",
    "ConsoleSink",
    "FileSink",
    "GCloudSink",
    "LogRackError",
    "Logger",
    "LoggerOptions",
    "MemorySink",
    "Registry",
    "RegistrySettings",
    "SinkAlreadyAttachedError",
    "SinkRegistrationError",
    "SinkType",
    "SinkTypeRegistry",
    "UnknownTransportError",
    "close",
    "default_sink_types",
    "get",
    "has",
    "loggers",
    "merge_options",
]
