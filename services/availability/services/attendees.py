"""
Attendee set matching for events.
"""

from bisect import bisect_left
from typing import Iterable, Tuple

from services.availability.algorithms import merge_sort
from services.availability.schemas import Event


class AttendeeMatcher:
    """
    Test whether an event involves any of a fixed set of attendees.

    The requested ids are sorted once at construction (O(m log m)); each
    membership test is then a binary search, so checking an event with n
    attendees costs O(n log m). Ids are opaque and compared exactly.
    """

    def __init__(self, attendees: Iterable[str]):
        self._attendees: Tuple[str, ...] = tuple(merge_sort(set(attendees)))

    def __len__(self) -> int:
        return len(self._attendees)

    def __bool__(self) -> bool:
        return bool(self._attendees)

    def __call__(self, event: Event) -> bool:
        return self.intersects(event.attendees)

    def is_requested(self, attendee: str) -> bool:
        index = bisect_left(self._attendees, attendee)
        return index < len(self._attendees) and self._attendees[index] == attendee

    def intersects(self, attendees: Iterable[str]) -> bool:
        """Return True if at least one of ``attendees`` was requested."""
        if not self._attendees:
            return False
        return any(self.is_requested(attendee) for attendee in attendees)

    def count_shared(self, attendees: Iterable[str]) -> int:
        """Return how many of ``attendees`` were requested."""
        if not self._attendees:
            return 0
        return sum(1 for attendee in set(attendees) if self.is_requested(attendee))
