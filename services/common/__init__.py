"""
Common utilities and configurations shared by the scheduling services.
"""

from services.common.errors import (
    ErrorCode,
    ErrorResponse,
    InternalInvariantError,
    SchedulingError,
    InvalidInputError,
)
from services.common.logging_config import (
    bind_query_id,
    get_logger,
    setup_service_logging,
)

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "SchedulingError",
    "InvalidInputError",
    "InternalInvariantError",
    "bind_query_id",
    "get_logger",
    "setup_service_logging",
]
