"""
Availability service schemas for calendar events and meeting requests.
"""

import uuid
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field

from .time_range import TimeRange


class Event(BaseModel):
    """An existing calendar commitment shared by a set of attendees."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), description="Event identifier"
    )
    name: str = Field(..., description="Event title")
    attendees: FrozenSet[str] = Field(
        default_factory=frozenset, description="Opaque attendee identifiers"
    )
    when: TimeRange = Field(..., description="Minutes of the day the event occupies")


class MeetingRequest(BaseModel):
    """
    A meeting that needs a time slot.

    ``duration`` is not range-checked: a duration that no day can fit is
    answered with an empty result.
    """

    model_config = ConfigDict(frozen=True)

    attendees: FrozenSet[str] = Field(
        default_factory=frozenset, description="Mandatory attendee identifiers"
    )
    optional_attendees: FrozenSet[str] = Field(
        default_factory=frozenset, description="Optional attendee identifiers"
    )
    duration: int = Field(..., description="Meeting length in minutes")

