"""
Reduce a tier's events to the ordered busy intervals they occupy.
"""

from dataclasses import dataclass
from itertools import chain
from typing import Iterable, List, Tuple

from services.availability.algorithms import merge_sort
from services.availability.exceptions import OutOfOrderError
from services.availability.schemas import Event, TimeRange
from services.common.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BusyInterval:
    """Minutes [start, end) during which at least one tier attendee is committed."""

    start: int
    end: int

    @classmethod
    def from_time_range(cls, time_range: TimeRange) -> "BusyInterval":
        return cls(start=time_range.start, end=time_range.end)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def contains(self, time_range: TimeRange) -> bool:
        return self.start <= time_range.start and time_range.end <= self.end

    def sort_key(self) -> Tuple[int, int]:
        """Start ascending, the later-ending interval first on ties."""
        return (self.start, -self.end)


def event_order(event: Event) -> Tuple[int, int]:
    """Sort key for events: start ascending, longest first on ties."""
    return (event.when.start, -event.when.duration)


def sort_events_by_time(events: Iterable[Event]) -> List[Event]:
    return merge_sort(events, key=event_order)


def busy_intervals_from_sorted(events: Iterable[Event]) -> List[BusyInterval]:
    """
    Collapse events sorted by ``event_order`` into busy intervals.

    Of events sharing a start only the longest survives, events nested inside
    the current interval are dropped, and overlapping or adjacent events
    extend it. Zero-length events occupy no time and are skipped.

    Raises:
        OutOfOrderError: an event starts before the interval being built
    """
    busy: List[BusyInterval] = []

    for event in events:
        when = event.when
        if when.duration <= 0:
            continue

        if not busy:
            busy.append(BusyInterval.from_time_range(when))
            continue

        current = busy[-1]
        if when.start < current.start:
            raise OutOfOrderError(
                "Events are not sorted by start time",
                previous_start=current.start,
                start=when.start,
                details={"event_id": event.id},
            )

        if when.start == current.start:
            # Keep the longest of the events sharing this start
            if when.end > current.end:
                busy[-1] = BusyInterval(start=current.start, end=when.end)
        elif current.contains(when):
            continue
        elif when.start <= current.end:
            busy[-1] = BusyInterval(start=current.start, end=when.end)
        else:
            busy.append(BusyInterval.from_time_range(when))

    return busy


def reduce_busy_intervals(events: Iterable[Event]) -> List[BusyInterval]:
    """Sort a tier's events and reduce them to non-overlapping busy intervals."""
    sorted_events = sort_events_by_time(events)
    busy = busy_intervals_from_sorted(sorted_events)
    logger.debug(
        "Reduced events to busy intervals",
        event_count=len(sorted_events),
        busy_count=len(busy),
    )
    return busy


def merge_busy_intervals(*tiers: Iterable[BusyInterval]) -> List[BusyInterval]:
    """Combine several tiers' busy intervals into one list ordered by start."""
    return merge_sort(chain(*tiers), key=BusyInterval.sort_key)
