"""
Environment-driven registry settings.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lograck import Registry, RegistrySettings, UnknownTransportError
from lograck.config import LogFormat, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("LR_LOG_LEVEL", "LR_LOG_SINKS", "LR_LOG_FORMAT", "LR_LOG_FILE_PATH", "LR_LOG_GCLOUD_LOG_NAME"):
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    settings = RegistrySettings(_env_file=None)
    assert settings.level is LogLevel.INFO
    assert settings.sink_names == ["console"]
    assert settings.format is LogFormat.CONSOLE


def test_reads_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("LR_LOG_LEVEL", "debug")
    monkeypatch.setenv("LR_LOG_SINKS", " console , FILE,")
    monkeypatch.setenv("LR_LOG_FORMAT", "json")
    monkeypatch.setenv("LR_LOG_FILE_PATH", str(tmp_path / "app.log"))

    settings = RegistrySettings(_env_file=None)

    assert settings.level is LogLevel.DEBUG
    assert settings.sink_names == ["console", "file"]
    options = settings.to_options()
    assert options.level == "debug"
    assert dict(options.sink_options) == {
        "console": {"fmt": "json"},
        "file": {"filename": str(tmp_path / "app.log")},
    }


def test_rejects_unknown_level(monkeypatch) -> None:
    monkeypatch.setenv("LR_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        RegistrySettings(_env_file=None)


def test_settings_are_frozen() -> None:
    settings = RegistrySettings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.sinks = "file"


def test_registry_from_settings(tmp_path) -> None:
    settings = RegistrySettings(_env_file=None, sinks="memory,file", file_path=str(tmp_path / "svc.log"), level="warning")
    registry = Registry.from_settings(settings)

    logger = registry.logger("svc")
    assert logger.sink_names == ["console", "memory", "file"]
    logger.info("dropped")
    logger.warning("kept")
    assert logger.sinks["memory"].messages == ["kept"]

    registry.close()
    assert '"kept"' in (tmp_path / "svc.log").read_text(encoding="utf-8")


def test_unknown_sink_in_settings_fails_on_first_logger() -> None:
    registry = Registry.from_settings(RegistrySettings(_env_file=None, sinks="kafka"))
    with pytest.raises(UnknownTransportError):
        registry.logger("svc")
    assert not registry.has("svc")
