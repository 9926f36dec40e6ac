"""
Availability service schemas.
"""

from .events import Event, MeetingRequest
from .time_range import (
    END_OF_DAY,
    MINUTES_PER_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    TimeRange,
    time_in_minutes,
)

__all__ = [
    "Event",
    "MeetingRequest",
    "TimeRange",
    "time_in_minutes",
    "START_OF_DAY",
    "END_OF_DAY",
    "MINUTES_PER_DAY",
    "WHOLE_DAY",
]
