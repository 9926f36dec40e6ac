"""
Availability Service: find the free times of day for a requested meeting.

Usage:
    from services.availability import Event, FindMeetingQuery, MeetingRequest, TimeRange
    from services.availability import configure_logging

    events = [
        Event(name="Standup", attendees={"alice"}, when=TimeRange(start=540, end=570)),
    ]
    request = MeetingRequest(attendees={"alice"}, duration=30)
    configure_logging()
    slots = FindMeetingQuery().query(events, request)
"""

from services.availability.exceptions import OutOfOrderError
from services.availability.schemas import (
    END_OF_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
)
from services.availability.services.meeting_query import FindMeetingQuery
from services.availability.settings import configure_logging

__all__ = [
    "FindMeetingQuery",
    "Event",
    "MeetingRequest",
    "TimeRange",
    "OutOfOrderError",
    "START_OF_DAY",
    "END_OF_DAY",
    "WHOLE_DAY",
    "configure_logging",
]
