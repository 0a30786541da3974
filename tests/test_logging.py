"""Tests for structured logging configuration."""

import json
import logging

from conftest import NOW
from mdi_advisor.core.iob import calculate_iob
from mdi_advisor.logging_config import (
    JsonFormatter,
    TextFormatter,
    correlation_id_ctx,
    get_logger,
    setup_logging,
)


def _record(level: int = logging.INFO, msg: str = "Test", **extra_fields) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="/app/engine.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    if extra_fields:
        record.extra_fields = extra_fields
    return record


class TestJsonFormatter:
    """Tests for JSON log formatting."""

    def test_json_format_basic(self):
        formatter = JsonFormatter(service_name="test-service")
        parsed = json.loads(formatter.format(_record(msg="Dose calculated")))

        assert parsed["level"] == "INFO"
        assert parsed["service"] == "test-service"
        assert parsed["message"] == "Dose calculated"
        assert parsed["logger"] == "test.logger"
        assert "timestamp" in parsed

    def test_default_service_name(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["service"] == "mdi-advisor"

    def test_json_format_with_correlation_id(self):
        token = correlation_id_ctx.set("test-correlation-123")
        try:
            parsed = json.loads(JsonFormatter().format(_record()))
            assert parsed["correlation_id"] == "test-correlation-123"
        finally:
            correlation_id_ctx.reset(token)

    def test_json_format_without_correlation_id(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert "correlation_id" not in parsed

    def test_extra_fields_are_merged(self):
        parsed = json.loads(JsonFormatter().format(_record(dose=5.5, time_of_day="breakfast")))

        assert parsed["dose"] == 5.5
        assert parsed["time_of_day"] == "breakfast"

    def test_json_format_error_includes_location(self):
        record = _record(level=logging.ERROR)
        record.funcName = "calculate"

        parsed = json.loads(JsonFormatter().format(record))

        assert parsed["location"] == {
            "file": "/app/engine.py",
            "line": 42,
            "function": "calculate",
        }

    def test_json_format_with_exception(self):
        import sys

        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = _record(level=logging.ERROR)
        record.exc_info = exc_info

        parsed = json.loads(JsonFormatter().format(record))
        assert "ValueError" in parsed["exception"]


class TestTextFormatter:
    """Tests for text log formatting."""

    def test_text_format_basic(self):
        output = TextFormatter(service_name="test-service").format(_record(msg="Test message"))

        assert "test-service" in output
        assert "INFO" in output
        assert "Test message" in output
        assert "[-]" in output

    def test_text_format_with_correlation_id(self):
        token = correlation_id_ctx.set("abc-123")
        try:
            assert "[abc-123]" in TextFormatter().format(_record())
        finally:
            correlation_id_ctx.reset(token)

    def test_text_format_appends_extra_fields(self):
        output = TextFormatter().format(_record(iob=1.25, injections=2))
        assert output.endswith("iob=1.25 injections=2")


class TestStructuredLogger:
    """Tests for StructuredLogger wrapper."""

    def test_logger_info(self, caplog):
        logger = get_logger("test.logger")

        with caplog.at_level(logging.INFO):
            logger.info("Test info message")

        assert "Test info message" in caplog.text

    def test_extra_fields_reach_record(self, caplog):
        logger = get_logger("test.logger")

        with caplog.at_level(logging.INFO):
            logger.warning("Missing translation", key="periods.night", language="es")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.extra_fields == {"key": "periods.night", "language": "es"}

    def test_exception_logs_error_with_traceback(self, caplog):
        logger = get_logger("test.logger")

        with caplog.at_level(logging.INFO):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                logger.exception("Unhandled request error", path="/api/dose/calculate")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info is not None
        assert record.extra_fields == {"path": "/api/dose/calculate"}

    def test_engine_logs_calculations_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="mdi_advisor.core.iob"):
            calculate_iob([], NOW, 4)

        record = next(r for r in caplog.records if r.getMessage() == "IOB calculated")
        assert record.levelno == logging.DEBUG
        assert record.extra_fields["injections"] == 0


class TestSetupLogging:
    """Tests for logging setup function."""

    def test_setup_json_logging(self):
        setup_logging(log_format="json", log_level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text_logging(self):
        setup_logging(log_format="text", log_level="INFO")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_setup_custom_service_name(self):
        setup_logging(log_format="json", service_name="custom-service")

        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, JsonFormatter)
        assert formatter.service_name == "custom-service"
