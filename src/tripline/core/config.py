"""Configuration for Tripline."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

# Pixel widths representing 24 hours, ascending
ZOOM_LADDER: Tuple[int, ...] = (20, 30, 40, 60, 90, 120, 180, 240)


@dataclass
class LayoutConfig:
    """Geometry and zoom settings for the timeline layout."""

    # Width of the location label column (px)
    location_label_width: float = 200

    # Height of one track and gap between two tracks (px)
    track_height: float = 20
    track_gap: float = 50

    # Space above the first track reserved for the date header (px)
    padding_top: float = 40

    # Constant shift applied to every track top (px)
    track_offset: float = 10

    zoom_ladder: Tuple[int, ...] = ZOOM_LADDER

    # Rung used when no preference exists (60 px/day)
    default_zoom_index: int = 3

    # Resize events are coalesced into one recompute per this interval (s)
    resize_throttle: float = 0.1

    @property
    def default_day_width(self) -> int:
        return self.zoom_ladder[self.default_zoom_index]


@dataclass
class Config:
    """Configuration for one trip file."""

    # Path to the trip JSON
    trip_path: Path

    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # Verbose mode
    verbose: bool = False

    # Custom working directory (defaults to .tripline next to the trip)
    custom_work_dir: Optional[Path] = None

    @property
    def work_dir(self) -> Path:
        if self.custom_work_dir:
            return self.custom_work_dir
        return self.trip_path.parent / ".tripline"

    @property
    def preferences_file(self) -> Path:
        return self.work_dir / "preferences.json"

    def ensure_dirs(self) -> None:
        """Create the working directory."""
        self.work_dir.mkdir(parents=True, exist_ok=True)
