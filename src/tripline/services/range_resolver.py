"""Global time window of the timeline."""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from tripline.core.logger import log_call, log_result
from tripline.models.location import Location
from tripline.models.step import Step
from tripline.services.timeutils import MS_PER_DAY, day_begin_timestamp, format_iso_with_tz, local_hour

NOON = 12


@dataclass(frozen=True)
class TimelineRange:
    """Inclusive [min_timestamp, max_timestamp] window in epoch millis."""

    min_timestamp: int = 0
    max_timestamp: int = 0

    @property
    def is_empty(self) -> bool:
        return self.min_timestamp == 0 and self.max_timestamp == 0

    @property
    def days(self) -> int:
        """Window length in whole days."""
        if self.is_empty:
            return 0
        span = self.max_timestamp - self.min_timestamp + 1
        return -(-span // MS_PER_DAY)


class TimelineRangeResolver:
    """Snaps the extent of all steps to local-day boundaries."""

    def __init__(self, locations: Mapping[str, Location]):
        """
        Args:
            locations: Locations by id
        """
        self.locations = locations

    def resolve(self, steps: Sequence[Step]) -> TimelineRange:
        """Compute the window covering every step.

        The start is padded by a day when the earliest step is a move
        starting before noon, the end when the latest step is a move
        finishing at noon or later.

        Returns:
            TimelineRange, empty when there are no steps
        """
        log_call("TimelineRangeResolver", "resolve", steps=len(steps))

        if not steps:
            log_result("TimelineRangeResolver", "resolve", "empty")
            return TimelineRange()

        earliest = steps[0]
        latest = steps[0]
        for step in steps[1:]:
            if step.start_timestamp < earliest.start_timestamp:
                earliest = step
            if step.finish_timestamp > latest.finish_timestamp:
                latest = step

        start_offset = self._offset(earliest.start_location_id)
        candidate_min = earliest.start_timestamp
        if earliest.is_move and local_hour(candidate_min, start_offset) < NOON:
            candidate_min -= MS_PER_DAY
        min_timestamp = day_begin_timestamp(candidate_min, start_offset)

        finish_offset = self._offset(latest.finish_location_id)
        max_timestamp = day_begin_timestamp(latest.finish_timestamp, finish_offset) + MS_PER_DAY - 1
        if latest.is_move and local_hour(latest.finish_timestamp, finish_offset) >= NOON:
            max_timestamp += MS_PER_DAY

        result = TimelineRange(min_timestamp=min_timestamp, max_timestamp=max_timestamp)
        log_result(
            "TimelineRangeResolver",
            "resolve",
            f"{format_iso_with_tz(min_timestamp, start_offset)} .. {format_iso_with_tz(max_timestamp, finish_offset)}",
        )
        return result

    def _offset(self, location_id: Optional[str]) -> int:
        location = self.locations.get(location_id) if location_id else None
        return location.timezone_offset if location else 0


def resolve_range(steps: Sequence[Step], locations: Mapping[str, Location]) -> TimelineRange:
    """Shortcut for TimelineRangeResolver(locations).resolve(steps)."""
    return TimelineRangeResolver(locations).resolve(steps)
