# tests/unit/core/test_logging.py
"""Tests for structured logging configuration and engine events."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from mockcloud import FaultCode, FetchRecordsOperation, MockContainer, Record, RecordID
from mockcloud.core.logging import configure_logging, get_logger
from mockcloud.faults import FaultConfiguration


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    yield
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(logging.WARNING)
    structlog.reset_defaults()


def _json_lines(out: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in out.strip().splitlines() if line.startswith("{")]


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON mode emits one JSON object per event."""
        configure_logging(json_output=True)
        get_logger("test").info("test message", key="value")

        data = _json_lines(capsys.readouterr().out)[-1]
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert data["level"] == "info"

    def test_logger_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=False)
        get_logger("test").info("test message", key="value")

        out = capsys.readouterr().out
        assert "test message" in out
        assert not out.strip().startswith("{")

    def test_level_filters_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, level="INFO")
        get_logger("test").debug("hidden")
        assert "hidden" not in capsys.readouterr().out

    def test_explicit_stream(self) -> None:
        buffer = io.StringIO()
        configure_logging(json_output=True, stream=buffer)
        get_logger("test").warning("to buffer")

        data = _json_lines(buffer.getvalue())[-1]
        assert data["event"] == "to buffer"
        assert data["level"] == "warning"

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging(level="chatty")

    def test_stdlib_logger_routed_through_structlog(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)
        logging.getLogger("app.under.test").warning("from stdlib")

        data = _json_lines(capsys.readouterr().out)[-1]
        assert data["event"] == "from stdlib"
        assert "_record" not in data


class TestEngineEvents:
    """The engine logs what it did without changing outcomes."""

    def test_operation_executed_event(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, level="DEBUG")
        container = MockContainer(faults=FaultConfiguration())
        container.private_database.add_records([Record.named("a", "Item")])
        container.private_database.add(FetchRecordsOperation([RecordID("a")], name="fetch-a"))

        events = [e for e in _json_lines(capsys.readouterr().out) if e["event"] == "operation_executed"]
        assert len(events) == 1
        assert events[0]["kind"] == "fetch"
        assert events[0]["name"] == "fetch-a"
        assert events[0]["scope"] == "private"
        assert events[0]["matched"] == 1
        assert events[0]["outcome"] == "success"

    def test_record_fault_event(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, level="DEBUG")
        container = MockContainer(faults=FaultConfiguration(failing_record_ids=[RecordID("a")]))
        container.private_database.add_records([Record.named("a", "Item")])
        container.private_database.add(FetchRecordsOperation([RecordID("a")]))

        events = [e for e in _json_lines(capsys.readouterr().out) if e["event"] == "record_fault_injected"]
        assert len(events) == 1
        assert events[0]["record_name"] == "a"
        assert FaultCode[str(events[0]["fault"])] == events[0]["code"]
