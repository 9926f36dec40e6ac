"""
Minute-of-day time ranges.

A TimeRange is the half-open span [start, end) measured in minutes from
midnight, so a whole day is [0, 1440).
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from services.common.errors import InvalidInputError

MINUTES_PER_DAY = 24 * 60

START_OF_DAY = 0
END_OF_DAY = MINUTES_PER_DAY - 1


def time_in_minutes(hours: int, minutes: int) -> int:
    """Convert a wall-clock time of day to minutes since midnight."""
    if hours < 0 or hours >= 24:
        raise InvalidInputError(
            "hours must be in [0, 24)", field="hours", value=hours
        )
    if minutes < 0 or minutes >= 60:
        raise InvalidInputError(
            "minutes must be in [0, 60)", field="minutes", value=minutes
        )
    return hours * 60 + minutes


class TimeRange(BaseModel):
    """Immutable half-open range of minutes within a single day."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=START_OF_DAY, le=MINUTES_PER_DAY)
    end: int = Field(..., ge=START_OF_DAY, le=MINUTES_PER_DAY)

    @model_validator(mode="after")
    def validate_end_not_before_start(self) -> "TimeRange":
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        return cls(start=start, end=start + duration)

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        """
        Build a range from two minutes of the day.

        With ``inclusive`` the ``end`` minute itself belongs to the range, so
        ``from_start_end(START_OF_DAY, END_OF_DAY, True)`` is the whole day.
        """
        return cls(start=start, end=end + 1 if inclusive else end)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def contains_point(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def contains(self, other: "TimeRange") -> bool:
        """
        Return True if ``other`` lies entirely inside this range.

        An empty range contains nothing; an empty ``other`` is treated as the
        single point at its start.
        """
        if self.duration <= 0:
            return False
        if other.duration <= 0:
            return self.contains_point(other.start)
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: "TimeRange") -> bool:
        return self.contains_point(other.start) or other.contains_point(self.start)

    @staticmethod
    def order_by_start(time_range: "TimeRange") -> Tuple[int, int]:
        """Sort key: start ascending, the later-ending range first on ties."""
        return (time_range.start, -time_range.end)

    def __str__(self) -> str:
        return f"Range: [{self.start}, {self.end})"


WHOLE_DAY = TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, inclusive=True)
