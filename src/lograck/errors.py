"""
Exception hierarchy for lograck.

All errors carry a stable ``code`` and a ``details`` mapping so callers can
branch on them without parsing messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LogRackError(Exception):
    """Root of every lograck exception."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class UnknownTransportError(LogRackError):
    """Options reference a sink type that is not registered.

    Raised from ``Registry.logger()`` before anything is cached.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot add unknown transport: {name}",
            code="UNKNOWN_TRANSPORT",
            details={"name": name},
        )


class SinkRegistrationError(LogRackError):
    """A sink type could not be added to a ``SinkTypeRegistry``."""

    def __init__(self, name: Any, reason: str) -> None:
        super().__init__(
            f"Cannot register sink type {name!r}: {reason}",
            code="SINK_REGISTRATION",
            details={"name": name, "reason": reason},
        )


class SinkAlreadyAttachedError(LogRackError):
    """A logger was given two sinks sharing one name."""

    def __init__(self, *, logger_name: str, sink_name: str) -> None:
        super().__init__(
            f"Sink '{sink_name}' already attached to logger '{logger_name}'",
            code="SINK_ALREADY_ATTACHED",
            details={"logger": logger_name, "sink": sink_name},
        )
