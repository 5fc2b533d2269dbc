"""Data models for Tripline."""

from tripline.models.location import Coordinates, Location
from tripline.models.step import Move, Stay, Step
from tripline.models.trip import Trip
from tripline.models.timeline import (
    DayCell,
    DaylightWindow,
    Label,
    MoveRectangle,
    Position,
    TimelineLayout,
    Track,
)

__all__ = [
    "Coordinates",
    "Location",
    "Move",
    "Stay",
    "Step",
    "Trip",
    "DayCell",
    "DaylightWindow",
    "Label",
    "MoveRectangle",
    "Position",
    "TimelineLayout",
    "Track",
]
