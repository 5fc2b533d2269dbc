"""Builds the multi-track timeline layout."""

from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from tripline.core.config import LayoutConfig
from tripline.core.logger import log_call, log_info, log_result, log_warning
from tripline.models.location import Location
from tripline.models.step import Step
from tripline.models.timeline import (
    DayCell,
    DaylightWindow,
    Label,
    MoveRectangle,
    Position,
    TimelineLayout,
    Track,
)
from tripline.services.daylight import calculate_daylight
from tripline.services.range_resolver import TimelineRange, TimelineRangeResolver
from tripline.services.timeutils import (
    MS_PER_DAY,
    clock_time,
    dates_between,
    day_begin_timestamp,
    format_duration,
    format_iso_with_tz,
)

MINUTES_PER_DAY = 1440


class GridBuilder:
    """Converts locations and steps into track geometry.

    One linear timestamp → x scale is shared by all tracks; tracks only
    differ in their vertical offset. Day cells are bucketed by each
    location's own calendar, so two tracks may disagree on which date an
    instant belongs to.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def build(
        self,
        steps: Sequence[Step],
        locations: Mapping[str, Location],
        day_width: float,
    ) -> TimelineLayout:
        """Compute the layout.

        Args:
            steps: Steps in any order
            locations: Locations by id
            day_width: Pixels representing 24 hours

        Returns:
            TimelineLayout; the empty layout when no step can be placed
        """
        log_call("GridBuilder", "build", steps=len(steps), locations=len(locations), day_width=day_width)

        if day_width <= 0:
            log_warning(f"day width {day_width} is not positive, using {min(self.config.zoom_ladder)}")
            day_width = min(self.config.zoom_ladder)

        usable = sorted(self._resolvable(steps, locations), key=lambda s: s.start_timestamp)
        if not usable:
            log_result("GridBuilder", "build", "empty")
            return TimelineLayout.empty(day_width)

        window = TimelineRangeResolver(locations).resolve(usable)
        ms_per_px = MS_PER_DAY / day_width

        def x_of(timestamp: int) -> float:
            return self.config.location_label_width + (timestamp - window.min_timestamp) / ms_per_px

        tracks: Dict[str, Track] = {}
        for index, location_id in enumerate(self._track_order(usable)):
            location = locations[location_id]
            top = self.track_top(index)
            tracks[location_id] = Track(
                location_id=location_id,
                name=location.name,
                track_top_px=top,
                day_cells=self._build_day_cells(location, usable, window, top, day_width, x_of),
            )

        moves = self._build_moves(usable, locations, tracks, x_of)

        highest_top = max(track.track_top_px for track in tracks.values())
        layout = TimelineLayout(
            min_timestamp=window.min_timestamp,
            max_timestamp=window.max_timestamp,
            day_width_px=day_width,
            total_width_px=x_of(window.max_timestamp + 1),
            total_height_px=highest_top + self.config.track_height + self.config.padding_top,
            tracks=tracks,
            moves=moves,
        )
        log_result("GridBuilder", "build", f"{len(tracks)} tracks, {len(moves)} moves")
        return layout

    def track_top(self, index: int) -> float:
        """Vertical position of the track at `index`."""
        cfg = self.config
        return cfg.padding_top + index * (cfg.track_height + cfg.track_gap) - cfg.track_offset

    # --- Steps and tracks ---

    def _resolvable(self, steps: Sequence[Step], locations: Mapping[str, Location]) -> List[Step]:
        """Drop steps referencing unknown locations."""
        result = []
        for step in steps:
            missing = [location_id for location_id in step.location_ids if location_id not in locations]
            if missing:
                log_info(f"step {step.id} skipped, unknown location {', '.join(missing)}")
                continue
            result.append(step)
        return result

    def _track_order(self, steps: Sequence[Step]) -> List[str]:
        """Location ids in order of first reference."""
        order: List[str] = []
        for step in steps:
            for location_id in step.location_ids:
                if location_id not in order:
                    order.append(location_id)
        return order

    # --- Day cells ---

    def _build_day_cells(self, location, steps, window: TimelineRange, top, day_width, x_of) -> List[DayCell]:
        offset = location.timezone_offset
        stays = [s for s in steps if s.is_stay and s.start_location_id == location.id]
        moves = [s for s in steps if s.is_move and location.id in s.location_ids]

        cells = []
        for ymd in dates_between(window.min_timestamp, window.max_timestamp, offset):
            day_begin = day_begin_timestamp(ymd, offset)
            day_end = day_begin + MS_PER_DAY - 1

            has_stay = any(s.start_timestamp <= day_end and s.finish_timestamp >= day_begin for s in stays)
            has_move = any(
                day_begin <= s.start_timestamp <= day_end or day_begin <= s.finish_timestamp <= day_end
                for s in moves
            )

            rect = Position(left=x_of(day_begin), top=top, width=day_width, height=self.config.track_height)
            daylight = calculate_daylight(location.lat, location.lng, ymd, offset)

            cells.append(
                DayCell(
                    location_id=location.id,
                    date=ymd,
                    timestamp=day_begin,
                    has_stay=has_stay,
                    has_move=has_move,
                    is_weekend=date.fromisoformat(ymd).weekday() >= 5,
                    rect=rect,
                    daylight=daylight,
                    daylight_rect=self.daylight_rect(rect, daylight),
                )
            )
        return cells

    @staticmethod
    def daylight_rect(rect: Position, daylight: DaylightWindow) -> Optional[Position]:
        """Sub-rectangle of a day cell lit by the sun, None during polar night."""
        if daylight.is_polar_night:
            return None
        if daylight.is_polar_day:
            return rect

        sunrise = daylight.sunrise_minutes
        sunset = daylight.sunset_minutes
        left = rect.left + rect.width * sunrise / MINUTES_PER_DAY
        width = rect.width * daylight.day_length_minutes / MINUTES_PER_DAY
        # Sunset past local midnight: clip at the cell edge
        if sunset < sunrise:
            width = rect.right - left
        return Position(left=left, top=rect.top, width=width, height=rect.height)

    # --- Moves ---

    def _build_moves(self, steps, locations, tracks: Dict[str, Track], x_of) -> List[MoveRectangle]:
        height = self.config.track_height
        result = []
        for step in steps:
            if not step.is_move:
                continue
            start_track = tracks.get(step.start_location_id)
            finish_track = tracks.get(step.finish_location_id)
            if start_track is None or finish_track is None:
                continue

            start_x = x_of(step.start_timestamp)
            finish_x = x_of(step.finish_timestamp)
            top = min(start_track.track_top_px, finish_track.track_top_px)
            bottom = max(start_track.track_top_px, finish_track.track_top_px) + height
            rect = Position(left=min(start_x, finish_x), top=top, width=abs(finish_x - start_x), height=bottom - top)

            middle = rect.top + rect.height / 2
            begin_text = self._label_time(step.start_date, step.start_timestamp, locations[step.start_location_id])
            end_text = self._label_time(step.finish_date, step.finish_timestamp, locations[step.finish_location_id])

            result.append(
                MoveRectangle(
                    step_id=step.id,
                    start_location_id=step.start_location_id,
                    finish_location_id=step.finish_location_id,
                    rect=rect,
                    begin_time_label=Label(text=begin_text, left=rect.left, top=middle, anchor="left-center"),
                    end_time_label=Label(text=end_text, left=rect.right, top=middle, anchor="right-center"),
                    duration_label=Label(
                        text=format_duration(step.start_timestamp, step.finish_timestamp),
                        left=rect.left + rect.width / 2,
                        top=rect.bottom,
                        anchor="bottom-center",
                    ),
                )
            )
        return result

    @staticmethod
    def _label_time(iso_value: str, timestamp: int, location: Location) -> str:
        if iso_value:
            return clock_time(iso_value)
        return clock_time(format_iso_with_tz(timestamp, location.timezone_offset))


def build_layout(
    steps: Sequence[Step],
    locations: Mapping[str, Location],
    day_width: float,
    config: Optional[LayoutConfig] = None,
) -> TimelineLayout:
    """Compute the timeline layout from scratch."""
    return GridBuilder(config).build(steps, locations, day_width)


# Hosts call this whenever steps, locations or the zoom change
recompute = build_layout
