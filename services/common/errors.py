"""
Shared error classes and utilities for the scheduling services.

Provides:
- Base exception class for scheduling errors
- Common subclasses (InvalidInput, InternalInvariant)
- Shared error response model

Common Usage Patterns:
=====================

Basic Exception Usage:
>>> from services.common.errors import InternalInvariantError, ErrorCode
>>>
>>> # Invariant broken inside an algorithm
>>> error = InternalInvariantError(
...     "Busy intervals are not sorted",
...     code=ErrorCode.ORDERING_VIOLATION,
...     details={"previous_start": 120, "start": 60},
... )

Error Response Conversion:
>>> error.to_error_response().model_dump()["details"]["code"]
'ORDERING_VIOLATION'

Error Code Taxonomy:
===================
- VALIDATION_FAILED : Malformed input value objects
- ORDERING_VIOLATION : An algorithm received data in the wrong order
- INTERNAL_ERROR : Any other broken invariant
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from services.common.logging_config import query_id_var


def current_query_id() -> str:
    """Return the query id bound to this context, or a fresh one."""
    query_id = query_id_var.get()
    if query_id == "uninitialized":
        return str(uuid.uuid4())
    return query_id


class ErrorCode(str, Enum):
    """
    Standardized error codes for the scheduling services.

    Error codes follow the ALL_CAPS naming convention.
    """

    VALIDATION_FAILED = "VALIDATION_FAILED"  # Input value object is malformed
    ORDERING_VIOLATION = "ORDERING_VIOLATION"  # Data reached an algorithm unsorted
    INTERNAL_ERROR = "INTERNAL_ERROR"  # Generic internal error


class ErrorResponse(BaseModel):
    """
    Standardized error response model.

    Attributes:
        type: Error type categorization (e.g., "validation_error", "internal_error")
        message: Human-readable error message
        details: Optional dictionary containing additional error context
        timestamp: ISO 8601 timestamp of when the error occurred
        query_id: Query the error belongs to, for log correlation
    """

    type: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str
    query_id: str


class SchedulingError(Exception):
    """
    Base exception class for all scheduling errors.

    Attributes:
        message: Human-readable error message
        details: Dictionary containing additional error context
        error_type: Categorization of the error (validation_error, internal_error)
        error_code: Specific error code from the ErrorCode enum
        timestamp: ISO 8601 timestamp when error occurred
        query_id: Unique identifier for tracing

    Example:
        >>> error = SchedulingError(
        ...     message="Something broke",
        ...     details={"step": "reduce"},
        ...     error_code=ErrorCode.INTERNAL_ERROR,
        ... )
        >>> error.to_error_response().type
        'internal_error'
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_type: str = "internal_error",
        error_code: Optional[ErrorCode] = None,
        query_id: Optional[str] = None,
    ):
        self.message = message
        self.details = details or {}
        self.error_type = error_type
        self.error_code = error_code
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.query_id = query_id or current_query_id()
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """
        Convert exception to ErrorResponse Pydantic model.

        The error code, if any, is folded into the details.
        """
        details = {
            **self.details,
            **({"code": self.error_code.value} if self.error_code else {}),
        }
        return ErrorResponse(
            type=self.error_type,
            message=self.message,
            details=details if details else None,
            timestamp=self.timestamp,
            query_id=self.query_id,
        )


class InvalidInputError(SchedulingError):
    """
    Exception for malformed input.

    Args:
        message: Human-readable description of the validation failure
        field: Optional field name that failed validation
        value: Optional invalid value that was provided
        details: Optional additional validation context
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(
            message=message,
            details=details,
            error_type="validation_error",
            error_code=ErrorCode.VALIDATION_FAILED,
        )


class InternalInvariantError(SchedulingError):
    """
    Exception for a broken internal invariant.

    Raised when an algorithm detects state that only a bug can produce.
    Callers should not try to recover from it.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            details=details,
            error_type="internal_error",
            error_code=code,
        )

