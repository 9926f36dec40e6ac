"""
Find the times of day a requested meeting can take place.
"""

from typing import Collection, List, Optional

from services.availability.schemas import (
    MINUTES_PER_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
)
from services.availability.services.attendees import AttendeeMatcher
from services.availability.services.busy_intervals import (
    BusyInterval,
    merge_busy_intervals,
    reduce_busy_intervals,
)
from services.availability.services.gap_finder import find_gaps
from services.availability.services.optional_attendees import (
    find_slots_with_most_optional_attendees,
)
from services.availability.settings import get_settings
from services.common.errors import InternalInvariantError
from services.common.logging_config import (
    bind_query_id,
    get_logger,
    log_invariant_violation,
)

logger = get_logger(__name__)


class FindMeetingQuery:
    """
    Answer meeting requests against one day of events.

    Instances hold configuration only; every call to ``query`` builds its
    own working lists, so one instance can serve concurrent callers.
    """

    def __init__(self, maximize_optional_attendees: Optional[bool] = None):
        if maximize_optional_attendees is None:
            maximize_optional_attendees = get_settings().maximize_optional_attendees
        self.maximize_optional_attendees = maximize_optional_attendees

    @staticmethod
    def busy_intervals_for(
        events: Collection[Event], attendees: Collection[str]
    ) -> List[BusyInterval]:
        """Busy intervals of every event involving at least one of ``attendees``."""
        matcher = AttendeeMatcher(attendees)
        if not matcher:
            return []
        return reduce_busy_intervals(event for event in events if matcher(event))

    def query(
        self, events: Collection[Event], request: MeetingRequest
    ) -> List[TimeRange]:
        """
        Return every free range in which the requested meeting fits.

        Slots suiting every attendee are preferred. When there are none, the
        slots suiting only the mandatory attendees are returned instead.
        A returned slot never conflicts with a mandatory attendee.

        Args:
            events: The day's events, in any order
            request: Attendees and duration of the meeting

        Returns:
            Free ranges in ascending order, each at least ``request.duration``
            minutes long; empty when the meeting cannot be held

        Raises:
            OutOfOrderError: an internal sort step produced unordered data
        """
        with bind_query_id():
            try:
                return self._query(events, request)
            except InternalInvariantError as exc:
                response = exc.to_error_response()
                log_invariant_violation(
                    response.type, response.message, **(response.details or {})
                )
                raise

    def _query(
        self, events: Collection[Event], request: MeetingRequest
    ) -> List[TimeRange]:
        duration = request.duration
        if duration > MINUTES_PER_DAY or duration < 0:
            logger.info("Meeting duration outside a day", duration=duration)
            return []
        if duration == 0:
            logger.info("Meeting duration is zero, whole day available")
            return [WHOLE_DAY]

        mandatory_busy = self.busy_intervals_for(events, request.attendees)
        optional_busy = self.busy_intervals_for(events, request.optional_attendees)

        combined_free = find_gaps(
            merge_busy_intervals(mandatory_busy, optional_busy), duration
        )
        if combined_free:
            logger.debug("Slots suit every attendee", slot_count=len(combined_free))
            return combined_free

        if self.maximize_optional_attendees and request.optional_attendees:
            partial_free = find_slots_with_most_optional_attendees(
                events, mandatory_busy, request.optional_attendees, duration
            )
            if partial_free:
                return partial_free

        if mandatory_busy:
            mandatory_free = find_gaps(mandatory_busy, duration)
            if mandatory_free:
                logger.debug(
                    "Slots suit mandatory attendees only",
                    slot_count=len(mandatory_free),
                )
                return mandatory_free

        logger.debug("No slot suits the mandatory attendees")
        return []
