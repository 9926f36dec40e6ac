"""
Find the free gaps of a day around a list of busy intervals.
"""

from typing import Iterable, List

from services.availability.exceptions import OutOfOrderError
from services.availability.schemas import END_OF_DAY, START_OF_DAY, TimeRange
from services.availability.services.busy_intervals import BusyInterval


def _gap(previous_end: int, start: int, duration: int) -> TimeRange | None:
    if start > previous_end and start - previous_end >= duration:
        return TimeRange.from_start_duration(previous_end, start - previous_end)
    return None


def find_gaps(busy: Iterable[BusyInterval], duration: int) -> List[TimeRange]:
    """
    Return every free range of at least ``duration`` minutes.

    ``busy`` must be ordered by start. Consecutive intervals may overlap, as
    they do when two tiers are merged; the leading gap from the start of the
    day and the trailing gap to the end of the day are included.

    Args:
        busy: Busy intervals ordered by start
        duration: Minimum gap length in minutes

    Returns:
        Free ranges in ascending order

    Raises:
        OutOfOrderError: an interval starts before its predecessor
    """
    gaps: List[TimeRange] = []
    previous_start = START_OF_DAY
    previous_end = START_OF_DAY

    for interval in busy:
        if interval.start < previous_start:
            raise OutOfOrderError(
                "Busy intervals are not sorted by start time",
                previous_start=previous_start,
                start=interval.start,
            )
        gap = _gap(previous_end, interval.start, duration)
        if gap is not None:
            gaps.append(gap)
        previous_start = interval.start
        previous_end = max(previous_end, interval.end)

    gap = _gap(previous_end, END_OF_DAY + 1, duration)
    if gap is not None:
        gaps.append(gap)

    return gaps
