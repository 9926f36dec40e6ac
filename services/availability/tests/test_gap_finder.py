"""
Unit tests for the gap finder.
"""

import pytest

from services.availability.exceptions import OutOfOrderError
from services.availability.schemas import WHOLE_DAY, TimeRange
from services.availability.services.busy_intervals import BusyInterval
from services.availability.services.gap_finder import find_gaps


class TestFindGaps:
    """Test free gap discovery."""

    def test_no_busy_intervals_gives_whole_day(self):
        assert find_gaps([], 30) == [WHOLE_DAY]

    def test_leading_and_trailing_gaps(self):
        assert find_gaps([BusyInterval(60, 90)], 30) == [
            TimeRange(start=0, end=60),
            TimeRange(start=90, end=1440),
        ]

    def test_gap_exactly_duration_is_kept(self):
        busy = [BusyInterval(0, 510), BusyInterval(540, 1440)]
        assert find_gaps(busy, 30) == [TimeRange(start=510, end=540)]

    def test_short_gaps_dropped(self):
        busy = [BusyInterval(0, 510), BusyInterval(540, 1440)]
        assert find_gaps(busy, 31) == []

    def test_busy_from_start_of_day(self):
        assert find_gaps([BusyInterval(0, 100)], 10) == [
            TimeRange(start=100, end=1440)
        ]

    def test_busy_until_end_of_day(self):
        assert find_gaps([BusyInterval(1000, 1440)], 10) == [
            TimeRange(start=0, end=1000)
        ]

    def test_whole_day_busy(self):
        assert find_gaps([BusyInterval(0, 1440)], 1) == []

    def test_overlapping_intervals_tolerated(self):
        busy = [
            BusyInterval(0, 1440),
            BusyInterval(480, 510),
            BusyInterval(540, 570),
        ]
        assert find_gaps(busy, 30) == []

    def test_nested_interval_does_not_reopen_gap(self):
        busy = [BusyInterval(100, 400), BusyInterval(150, 200), BusyInterval(500, 600)]
        assert find_gaps(busy, 30) == [
            TimeRange(start=0, end=100),
            TimeRange(start=400, end=500),
            TimeRange(start=600, end=1440),
        ]

    def test_unsorted_input_raises(self):
        with pytest.raises(OutOfOrderError):
            find_gaps([BusyInterval(300, 330), BusyInterval(60, 90)], 30)

    def test_gaps_ascending_and_long_enough(self):
        busy = [BusyInterval(s, s + 45) for s in range(60, 1400, 100)]
        gaps = find_gaps(busy, 40)
        assert all(gap.duration >= 40 for gap in gaps)
        for previous, current in zip(gaps, gaps[1:]):
            assert previous.end <= current.start
