"""
Relaxation tier that keeps as many optional attendees as possible.

When no slot suits every attendee, this tier looks for the slots that suit
all mandatory attendees plus the largest group of optional attendees that
can meet together.
"""

from typing import Collection, FrozenSet, Iterable, List

from services.availability.algorithms import filter_and_sort, merge_sort
from services.availability.schemas import Event, TimeRange
from services.availability.services.attendees import AttendeeMatcher
from services.availability.services.busy_intervals import (
    BusyInterval,
    merge_busy_intervals,
    reduce_busy_intervals,
)
from services.availability.services.gap_finder import find_gaps
from services.common.logging_config import get_logger

logger = get_logger(__name__)


def _candidate_starts(
    gap: TimeRange, optional_events: Iterable[Event], duration: int
) -> List[int]:
    """
    Start minutes worth testing inside a mandatory gap.

    A best window can always slide earlier until it hits the gap start or
    the end of an optional attendee's event, so only those minutes matter.
    """
    starts = {gap.start}
    for event in optional_events:
        end = event.when.end
        if gap.start < end and end + duration <= gap.end:
            starts.add(end)
    return merge_sort(starts)


def _busy_attendees(
    optional_events: Iterable[Event], window: TimeRange
) -> FrozenSet[str]:
    busy: set = set()
    for event in optional_events:
        if event.when.duration > 0 and event.when.overlaps(window):
            busy.update(event.attendees)
    return frozenset(busy)


def find_slots_with_most_optional_attendees(
    events: Collection[Event],
    mandatory_busy: List[BusyInterval],
    optional_attendees: Iterable[str],
    duration: int,
) -> List[TimeRange]:
    """
    Return slots for all mandatory attendees and the largest optional group.

    The group is the set of optional attendees free during the earliest
    window that frees the most of them. The result is every gap of at least
    ``duration`` minutes left by the mandatory attendees and that group, or
    an empty list when no optional attendee can join any mandatory slot.

    Args:
        events: All events of the day
        mandatory_busy: Busy intervals of the mandatory attendees
        optional_attendees: Optional attendee ids
        duration: Meeting length in minutes
    """
    optional = frozenset(optional_attendees)
    matcher = AttendeeMatcher(optional)
    if not matcher:
        return []

    optional_events = filter_and_sort(events, matcher, key=lambda e: e.when.start)

    best_count = 0
    best_group: FrozenSet[str] = frozenset()
    for gap in find_gaps(mandatory_busy, duration):
        for start in _candidate_starts(gap, optional_events, duration):
            window = TimeRange.from_start_duration(start, duration)
            busy = _busy_attendees(optional_events, window)
            free_count = len(matcher) - matcher.count_shared(busy)
            if free_count > best_count:
                best_count = free_count
                best_group = optional - busy

    if best_count == 0:
        logger.debug("No optional attendee fits any mandatory slot")
        return []

    group_matcher = AttendeeMatcher(best_group)
    group_busy = reduce_busy_intervals(e for e in events if group_matcher(e))
    slots = find_gaps(merge_busy_intervals(mandatory_busy, group_busy), duration)
    logger.debug(
        "Found slots for largest optional group",
        optional_count=len(matcher),
        group_size=best_count,
        slot_count=len(slots),
    )
    return slots
