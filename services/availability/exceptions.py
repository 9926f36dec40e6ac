"""
Custom exceptions for the Availability Service.
"""

from typing import Any, Dict, Optional

from services.common.errors import ErrorCode, InternalInvariantError


class OutOfOrderError(InternalInvariantError):
    """Raised when intervals or events reach a scan step unsorted."""

    def __init__(
        self,
        message: str,
        previous_start: int,
        start: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = {
            **(details or {}),
            "previous_start": previous_start,
            "start": start,
        }
        super().__init__(
            message=message,
            code=ErrorCode.ORDERING_VIOLATION,
            details=details,
        )
        self.previous_start = previous_start
        self.start = start
