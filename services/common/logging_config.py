"""
Centralized logging configuration for the scheduling services.

This module provides consistent logging setup including:
- Structured logging with JSON format
- Query ID tracking for availability queries
- Enhanced text output for local debugging

Usage:
    from services.common.logging_config import setup_service_logging

    setup_service_logging(
        service_name="availability",
        log_level="INFO",
        log_format="json"
    )
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

import structlog

# Context variable for query-specific data
query_id_var: ContextVar[str] = ContextVar("query_id", default="uninitialized")


class QueryContextFilter(logging.Filter):
    """Add query context from contextvars to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.query_id = query_id_var.get()
        if not hasattr(record, "service_name"):
            record.service_name = getattr(record, "service", "unknown")
        return True


def add_query_context(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Add the current query ID to all log entries."""
    query_id = query_id_var.get()
    if query_id and query_id != "uninitialized":
        event_dict["query_id"] = query_id
    return event_dict


def add_service_context(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Add service name to all log entries."""
    logger_name = event_dict.get("logger", "")
    if logger_name.startswith("services."):
        # Logger paths look like "services.availability.services.gap_finder"
        service_parts = logger_name.split(".")
        if len(service_parts) >= 2:
            event_dict["service"] = service_parts[1]
    return event_dict


@contextmanager
def bind_query_id(query_id: str | None = None) -> Iterator[str]:
    """
    Bind a query ID to the logging context for the duration of a block.

    The previous value is restored on exit, so nested and concurrent
    queries each see their own ID.
    """
    query_id = query_id or str(uuid.uuid4())
    token = query_id_var.set(query_id)
    try:
        yield query_id
    finally:
        query_id_var.reset(token)


class EnhancedTextRenderer:
    """Custom text renderer for better debugging during development."""

    def __init__(self, service_name: str):
        self.service_name = service_name

    def __call__(
        self,
        logger: structlog.types.WrappedLogger,
        method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> str:
        """Render log entry as enhanced text format."""
        timestamp = event_dict.get("timestamp", "")
        level = event_dict.get("level", "INFO").upper()
        logger_name = event_dict.get("logger", "")
        message = event_dict.get("event", "")

        service = event_dict.get("service", self.service_name)

        # Only the last 4 chars of the query ID, for readability
        query_id = event_dict.get("query_id", "")
        if query_id and query_id != "uninitialized":
            query_id_suffix = (
                f"[{query_id[-4:]}]" if len(query_id) >= 4 else f"[{query_id}]"
            )
        else:
            query_id_suffix = ""

        clean_logger_name = logger_name
        if logger_name.startswith("services."):
            clean_logger_name = logger_name[9:]

        parts = [
            timestamp,
            f"[{service}]",
            f"[{level}]",
            query_id_suffix,
            f"{clean_logger_name}",
            f"- {message}",
        ]

        extra_context = []
        for key, value in event_dict.items():
            if key not in [
                "timestamp",
                "level",
                "logger",
                "event",
                "service",
                "query_id",
            ]:
                if isinstance(value, (str, int, float, bool)):
                    extra_context.append(f"{key}={value}")
                else:
                    extra_context.append(f"{key}={str(value)[:150]}...")

        if extra_context:
            parts.append(f" | {', '.join(extra_context)}")

        return " ".join(filter(None, parts))


def setup_service_logging(
    service_name: str,
    log_level: str = "INFO",
    log_format: str = "json",
) -> None:
    """
    Set up logging configuration for a service.

    Args:
        service_name: Name of the service (e.g., "availability")
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Format type ("json" or "text")
    """
    processors: list = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_query_context,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(EnhancedTextRenderer(service_name))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Always use a pass-through formatter for structlog output
    formatter = logging.Formatter("%(message)s")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(QueryContextFilter())

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = old_factory(*args, **kwargs)
        record.service_name = service_name
        return record

    logging.setLogRecordFactory(record_factory)

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        handlers=[handler],
        force=True,
    )

    logger = get_logger(__name__)
    logger.info(
        f"Logging configured for {service_name}",
        log_level=log_level,
        log_format=log_format,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_invariant_violation(
    error_type: str,
    message: str,
    **kwargs: Any,
) -> None:
    """
    Log a broken internal invariant right before it is raised.

    Args:
        error_type: Type of error (e.g., "ordering_violation")
        message: Human-readable error message
        **kwargs: Additional context to include in the log
    """
    logger = get_logger(__name__)
    logger.error(
        f"{error_type}: {message}",
        error_type=error_type,
        **kwargs,
    )
