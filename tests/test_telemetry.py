from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from utf8kit.errors import EncodingError, InvalidArgument, PatternSyntaxError
from utf8kit.patterns import PatternMatcher
from utf8kit.runtime import telemetry
from utf8kit.segment import split
from utf8kit.text import TextBuffer

LEVELS = {"debug", "info", "warning", "error"}


class RecordingLogger:
    """Stand-in for ``telelog.Logger`` capturing what the engine emits."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Any]] = []
        self.context: dict[str, str] = {}
        self.profiled: List[str] = []
        self.components: List[str] = []

    def _record(self, level: str):
        def emit(message: str, pairs: Any = None) -> None:
            self.records.append((level, message, dict(pairs or [])))

        return emit

    def __getattr__(self, name: str) -> Any:
        level = name[: -len("_with")] if name.endswith("_with") else name
        if level in LEVELS:
            return self._record(level)
        raise AttributeError(name)

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, "recorder", logger)
    monkeypatch.setattr(telemetry, "DEFAULT_LOGGER_NAME", "recorder")
    return logger


def events(logger: RecordingLogger) -> List[str]:
    return [payload["event"] for _, _, payload in logger.records if "event" in payload]


def test_record_event_formats_payload(recorder: RecordingLogger) -> None:
    telemetry.record_event("sample", level="warning", data={"raw": b"\xff", "n": 3})

    level, message, payload = recorder.records[-1]
    assert level == "warning"
    assert message == "event::sample"
    assert payload == {"event": "sample", "raw": "ff", "n": "3"}


def test_unknown_level_rejected(recorder: RecordingLogger) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("sample", level="loud")


def test_span_tracks_component_and_cleans_context(recorder: RecordingLogger) -> None:
    with telemetry.span("demo", component=True, metadata={"key": "value"}) as handle:
        assert recorder.context == {"key": "value"}
        handle.add_metadata("count", 2)

    assert recorder.profiled == ["demo"]
    assert recorder.components == ["demo"]
    assert recorder.context == {}


def test_span_reports_failure_and_reraises(recorder: RecordingLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("boom", component="patterns"):
            raise RuntimeError("exploded")

    level, message, payload = recorder.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["reason"] == "exploded"
    assert payload["component"] == "patterns"


class FakeConfig:
    def __init__(self) -> None:
        self.profiling = False

    def with_profiling(self, enabled: bool) -> "FakeConfig":
        self.profiling = enabled
        return self


def test_configure_adopts_config_and_drops_cached_loggers(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)
    monkeypatch.setitem(telemetry._LOGGER_CACHE, "stale", RecordingLogger())
    config = FakeConfig()

    telemetry.configure(config)

    assert telemetry._ACTIVE_CONFIG is config
    assert config.profiling is True
    assert "stale" not in telemetry._LOGGER_CACHE


def test_buffer_growth_emits_event(recorder: RecordingLogger) -> None:
    buffer = TextBuffer(min_capacity=2)

    buffer.append_text("abc")

    assert events(recorder) == ["buffer.grow"]


def test_invalid_snapshot_emits_warning(recorder: RecordingLogger) -> None:
    buffer = TextBuffer(4, min_capacity=4)
    buffer.append_bytes(b"\xe2\x82")

    with pytest.raises(EncodingError):
        buffer.snapshot()

    assert ("warning", "event::buffer.invalid_snapshot") in [
        (level, message) for level, message, _ in recorder.records
    ]


def test_pattern_compile_failure_is_reported(recorder: RecordingLogger) -> None:
    matcher = PatternMatcher(cache_size=0)

    with pytest.raises(PatternSyntaxError):
        matcher.compile("[a-")

    assert "patterns::compile" in recorder.profiled
    assert recorder.records[-1][1] == "span::fail"


def test_segment_rejection_is_reported(recorder: RecordingLogger) -> None:
    with pytest.raises(InvalidArgument):
        split("abc", "")

    assert events(recorder) == ["segment.invalid_argument"]
