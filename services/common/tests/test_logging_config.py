"""
Unit tests for logging configuration.

Tests the enhanced text renderer, service context extraction,
and query ID handling.
"""

import json
import logging
from unittest.mock import MagicMock

import structlog

from services.common.logging_config import (
    EnhancedTextRenderer,
    QueryContextFilter,
    add_query_context,
    add_service_context,
    bind_query_id,
    get_logger,
    log_invariant_violation,
    query_id_var,
    setup_service_logging,
)


class TestLoggingConfiguration:
    """Test the logging configuration features."""

    def setup_method(self):
        """Set up test environment."""
        query_id_var.set("uninitialized")

        logging.getLogger().handlers.clear()
        structlog.reset_defaults()

    def test_add_query_context(self):
        """Test that query context is added to log entries."""
        query_id_var.set("test-query-123")

        result = add_query_context(MagicMock(), "info", {"event": "test message"})

        assert result["query_id"] == "test-query-123"

    def test_add_query_context_no_context(self):
        """Test that missing query context is left out."""
        result = add_query_context(MagicMock(), "info", {"event": "test message"})

        assert "query_id" not in result

    def test_bind_query_id_restores_previous_value(self):
        """Test that bind_query_id is scoped to its block."""
        with bind_query_id("outer") as outer:
            assert outer == "outer"
            assert query_id_var.get() == "outer"
            with bind_query_id() as inner:
                assert inner != "outer"
                assert query_id_var.get() == inner
            assert query_id_var.get() == "outer"

        assert query_id_var.get() == "uninitialized"

    def test_bind_query_id_restores_on_error(self):
        """Test that the query ID is reset when the block raises."""
        try:
            with bind_query_id("failing"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert query_id_var.get() == "uninitialized"

    def test_query_context_filter(self):
        """Test that the stdlib filter copies the query ID onto records."""
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with bind_query_id("filter-query"):
            assert QueryContextFilter().filter(record)

        assert record.query_id == "filter-query"
        assert record.service_name == "unknown"

    def test_add_service_context(self):
        """Test that service context is extracted from logger names."""
        event_dict = {"logger": "services.availability.services.gap_finder"}
        result = add_service_context(MagicMock(), "info", event_dict)
        assert result["service"] == "availability"

        event_dict = {"logger": "services.common.logging_config"}
        result = add_service_context(MagicMock(), "info", event_dict)
        assert result["service"] == "common"

        for logger_name in ["some.other.logger", "services", ""]:
            result = add_service_context(MagicMock(), "info", {"logger": logger_name})
            assert "service" not in result

    def test_enhanced_text_renderer_basic(self):
        """Test basic text rendering functionality."""
        renderer = EnhancedTextRenderer("test-service")

        event_dict = {
            "timestamp": "2025-07-25T23:05:05.247325Z",
            "level": "INFO",
            "logger": "services.availability.main",
            "event": "Slots suit every attendee",
            "service": "availability",
            "slot_count": 3,
        }

        result = renderer(MagicMock(), "info", event_dict)

        assert "2025-07-25T23:05:05.247325Z" in result
        assert "[availability]" in result
        assert "[INFO]" in result
        assert "availability.main" in result
        assert "services.availability.main" not in result
        assert "Slots suit every attendee" in result
        assert "slot_count=3" in result

    def test_enhanced_text_renderer_with_query_id(self):
        """Test text rendering with a query ID."""
        renderer = EnhancedTextRenderer("test-service")

        event_dict = {
            "level": "INFO",
            "logger": "services.availability.main",
            "event": "Processing query",
            "query_id": "9f1b0f5d-a388-4ae2-8d66-67256cc71235",
        }

        result = renderer(MagicMock(), "info", event_dict)

        assert "[1235]" in result
        assert "[test-service]" in result

    def test_query_id_truncation_edge_cases(self):
        """Test query ID truncation with various lengths."""
        renderer = EnhancedTextRenderer("test-service")

        event_dict = {"level": "INFO", "event": "Test", "query_id": "1234"}
        assert "[1234]" in renderer(MagicMock(), "info", event_dict)

        event_dict["query_id"] = "123"
        assert "[123]" in renderer(MagicMock(), "info", event_dict)

        event_dict["query_id"] = ""
        assert "[]" not in renderer(MagicMock(), "info", event_dict)

    def test_enhanced_text_renderer_non_scalar_values(self):
        """Test that non-scalar values are shortened."""
        renderer = EnhancedTextRenderer("test-service")

        event_dict = {
            "level": "DEBUG",
            "event": "Busy intervals",
            "busy": list(range(200)),
        }

        result = renderer(MagicMock(), "debug", event_dict)

        assert "busy=[0, 1, 2" in result
        assert result.endswith("...")

    def test_setup_service_logging_json_format(self, capsys):
        """Test that JSON logs carry the query ID and extra fields."""
        setup_service_logging(
            service_name="availability", log_level="INFO", log_format="json"
        )

        logger = get_logger("services.availability.test")
        with bind_query_id("json-query"):
            logger.info("Test message", test_field="test_value")

        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        payload = json.loads(lines[-1])
        assert payload["event"] == "Test message"
        assert payload["test_field"] == "test_value"
        assert payload["query_id"] == "json-query"
        assert payload["service"] == "availability"
        assert payload["level"] == "info"

    def test_setup_service_logging_text_format(self, capsys):
        """Test that setup_service_logging works with text format."""
        setup_service_logging(
            service_name="availability", log_level="DEBUG", log_format="text"
        )

        get_logger("services.availability.test").debug("Debug message", slots=2)

        output = capsys.readouterr().out
        assert "Debug message" in output
        assert "slots=2" in output

    def test_log_level_filters_messages(self, capsys):
        """Test that messages below the configured level are dropped."""
        setup_service_logging(
            service_name="availability", log_level="WARNING", log_format="json"
        )

        get_logger("services.availability.test").info("Hidden message")

        assert "Hidden message" not in capsys.readouterr().out

    def test_log_invariant_violation(self, capsys):
        """Test that invariant violations are logged at error level."""
        setup_service_logging(
            service_name="availability", log_level="INFO", log_format="json"
        )

        log_invariant_violation("ordering_violation", "not sorted", start=5)

        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        payload = json.loads(lines[-1])
        assert payload["level"] == "error"
        assert payload["error_type"] == "ordering_violation"
        assert payload["start"] == 5
