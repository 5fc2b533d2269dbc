"""Models for the computed timeline layout."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

NO_TIME = "--:--"
POLAR_DAY_SUNRISE = "00:00"
POLAR_DAY_SUNSET = "23:59"


def _to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


@dataclass(frozen=True)
class DaylightWindow:
    """Local sunrise and sunset for one location and one date."""

    sunrise_local: str  # "HH:MM" or "--:--"
    sunset_local: str
    is_polar_night: bool = False

    @classmethod
    def polar_night(cls) -> "DaylightWindow":
        return cls(sunrise_local=NO_TIME, sunset_local=NO_TIME, is_polar_night=True)

    @classmethod
    def polar_day(cls) -> "DaylightWindow":
        return cls(sunrise_local=POLAR_DAY_SUNRISE, sunset_local=POLAR_DAY_SUNSET)

    @property
    def is_polar_day(self) -> bool:
        return (
            not self.is_polar_night
            and self.sunrise_local == POLAR_DAY_SUNRISE
            and self.sunset_local == POLAR_DAY_SUNSET
        )

    @property
    def sunrise_minutes(self) -> Optional[int]:
        """Minutes from local midnight, None during polar night."""
        if self.is_polar_night:
            return None
        return _to_minutes(self.sunrise_local)

    @property
    def sunset_minutes(self) -> Optional[int]:
        if self.is_polar_night:
            return None
        return _to_minutes(self.sunset_local)

    @property
    def day_length_minutes(self) -> int:
        """Length of daylight, wrapping past midnight when needed."""
        if self.is_polar_night:
            return 0
        if self.is_polar_day:
            return 1440
        return (self.sunset_minutes - self.sunrise_minutes) % 1440

    def to_dict(self) -> dict:
        return {
            "sunrise": self.sunrise_local,
            "sunset": self.sunset_local,
            "polar_night": self.is_polar_night,
        }


@dataclass(frozen=True)
class Position:
    """Rectangle in pixels."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def to_dict(self) -> dict:
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class DayCell:
    """One local calendar day on one location's track."""

    location_id: str
    date: str  # YYYY-MM-DD in the location's own offset
    timestamp: int  # local midnight, epoch millis
    has_stay: bool
    has_move: bool
    is_weekend: bool
    rect: Position
    daylight: DaylightWindow
    daylight_rect: Optional[Position]  # None = hidden (polar night)

    @property
    def is_empty(self) -> bool:
        return not self.has_stay and not self.has_move


@dataclass(frozen=True)
class Label:
    """Text anchored at a point."""

    text: str
    left: float
    top: float
    anchor: str  # "left-center", "right-center" or "bottom-center"


@dataclass(frozen=True)
class MoveRectangle:
    """Shape connecting the tracks of a move's two locations."""

    step_id: str
    start_location_id: str
    finish_location_id: str
    rect: Position
    begin_time_label: Label
    end_time_label: Label
    duration_label: Label


@dataclass(frozen=True)
class Track:
    """Horizontal lane of one location."""

    location_id: str
    name: str
    track_top_px: float
    day_cells: List[DayCell] = field(default_factory=list)


@dataclass(frozen=True)
class TimelineLayout:
    """Complete layout derived from locations, steps and day width."""

    min_timestamp: int
    max_timestamp: int
    day_width_px: float
    total_width_px: float
    total_height_px: float
    tracks: Dict[str, Track] = field(default_factory=dict)  # ordered top to bottom
    moves: List[MoveRectangle] = field(default_factory=list)

    @classmethod
    def empty(cls, day_width_px: float) -> "TimelineLayout":
        """Layout for the "no data" state."""
        return cls(
            min_timestamp=0,
            max_timestamp=0,
            day_width_px=day_width_px,
            total_width_px=0,
            total_height_px=0,
        )

    @property
    def is_empty(self) -> bool:
        return not self.tracks and self.min_timestamp == 0 and self.max_timestamp == 0

    @property
    def days_in_range(self) -> int:
        """Number of whole days covered by the window."""
        if self.is_empty:
            return 0
        span = self.max_timestamp - self.min_timestamp + 1
        return -(-span // 86_400_000)
