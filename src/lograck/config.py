"""
Registry Configuration.

Environment-driven defaults for a ``Registry``; every field can be set with an
``LR_LOG_``-prefixed variable or in a ``.env`` file.
"""

from enum import Enum
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .options import LoggerOptions


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class RegistrySettings(BaseSettings):
    """Base options applied to every logger a registry builds."""

    model_config = SettingsConfigDict(
        env_prefix="LR_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    sinks: str = Field(default="console", description="Comma-separated sink type names (console, file, memory, gcloud)")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Output format for console sinks")
    file_path: str = Field(default="logs/lograck.log", description="Path for file sinks")
    gcloud_log_name: str = Field(default="lograck", description="Log name for GCloud sinks")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @property
    def sink_names(self) -> list[str]:
        return [s.strip().lower() for s in self.sinks.split(",") if s.strip()]

    def to_options(self) -> LoggerOptions:
        """Per-sink options for every sink named in ``sinks``."""
        sink_options: Dict[str, Dict[str, Any]] = {}
        for name in self.sink_names:
            if name == "console":
                sink_options[name] = {"fmt": self.format.value}
            elif name == "file":
                sink_options[name] = {"filename": self.file_path}
            elif name == "gcloud":
                sink_options[name] = {"log_name": self.gcloud_log_name}
            else:
                sink_options[name] = {}
        return LoggerOptions(level=self.level.value.lower(), sink_options=sink_options)
