"""
LoggerOptions parsing and merge precedence.
"""

from __future__ import annotations

import pytest

from lograck import LoggerOptions, MemorySink, merge_options


class TestFromMapping:
    def test_splits_reserved_keys(self) -> None:
        sink = MemorySink()
        options = LoggerOptions.from_mapping(
            {"transports": [sink], "level": "debug", "file": {"filename": "a.log"}, "console": True}
        )
        assert options.sinks == (sink,)
        assert options.level == "debug"
        assert list(options.sink_options) == ["file", "console"]

    def test_sinks_key_is_an_alias(self) -> None:
        sink = MemorySink()
        assert LoggerOptions.from_mapping({"sinks": [sink]}).sinks == (sink,)

    def test_missing_sink_list_differs_from_empty(self) -> None:
        assert LoggerOptions.from_mapping({}).sinks is None
        assert LoggerOptions.from_mapping({"transports": []}).sinks == ()

    def test_none_mapping(self) -> None:
        assert LoggerOptions.from_mapping(None) == LoggerOptions()

    def test_sink_options_are_read_only_copies(self) -> None:
        raw = {"memory": {}}
        options = LoggerOptions.from_mapping(raw)
        raw["console"] = {}
        assert list(options.sink_options) == ["memory"]
        with pytest.raises(TypeError):
            options.sink_options["file"] = {}  # type: ignore[index]

    def test_coerce(self) -> None:
        struct = LoggerOptions(level="info")
        assert LoggerOptions.coerce(struct) is struct
        assert LoggerOptions.coerce(None) is None
        assert LoggerOptions.coerce({"level": "error"}).level == "error"


class TestSinkOptionHelpers:
    def test_enabled_sink_options(self) -> None:
        options = LoggerOptions(sink_options={"console": False, "file": {"filename": "a"}, "memory": True, "gcloud": None})
        assert options.enabled_sink_options() == {"file": {"filename": "a"}, "memory": {}}

    @pytest.mark.parametrize("key", ["console", "Console"])
    def test_declares_matches_first_letter_case(self, key: str) -> None:
        assert LoggerOptions(sink_options={key: False}).declares("console")

    def test_declares_absent(self) -> None:
        assert not LoggerOptions(sink_options={"file": {}}).declares("console")


class TestMerge:
    def test_no_override_uses_base(self) -> None:
        base = LoggerOptions(level="warning", sink_options={"memory": {}})
        merged = merge_options(None, base)
        assert merged.level == "warning"
        assert dict(merged.sink_options) == {"memory": {}}
        assert merged.sinks is None

    def test_defaults_when_nothing_given(self) -> None:
        merged = merge_options(None, None)
        assert merged.level == "info"
        assert merged.sinks is None
        assert dict(merged.sink_options) == {}

    def test_override_sink_options_replace_base(self) -> None:
        base = LoggerOptions(sink_options={"memory": {}})
        merged = merge_options(LoggerOptions(sink_options={"file": {}}), base)
        assert list(merged.sink_options) == ["file"]

    def test_empty_override_drops_base_sink_options(self) -> None:
        base = LoggerOptions(sink_options={"memory": {}})
        assert dict(merge_options(LoggerOptions(), base).sink_options) == {}

    def test_level_falls_through(self) -> None:
        base = LoggerOptions(level="error")
        assert merge_options(LoggerOptions(), base).level == "error"
        assert merge_options(LoggerOptions(level="debug"), base).level == "debug"

    def test_sinks_fall_through(self) -> None:
        base_sink = MemorySink()
        base = LoggerOptions(sinks=(base_sink,))
        assert merge_options(LoggerOptions(), base).sinks == (base_sink,)
        assert merge_options(LoggerOptions(sinks=()), base).sinks == ()

    def test_arguments_untouched(self) -> None:
        base = LoggerOptions(level="error", sink_options={"memory": {}})
        override = LoggerOptions(sink_options={"file": {}})
        merge_options(override, base)
        assert base == LoggerOptions(level="error", sink_options={"memory": {}})
        assert override == LoggerOptions(sink_options={"file": {}})
