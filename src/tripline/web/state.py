"""In-memory state of the web API."""

from collections import deque
from datetime import datetime
from typing import Deque, Dict, List, Optional
import threading

from tripline.core.config import Config, LayoutConfig
from tripline.models.location import Location
from tripline.models.step import Step
from tripline.models.timeline import TimelineLayout
from tripline.models.trip import Trip
from tripline.services.grid_builder import GridBuilder
from tripline.services.preferences import MemoryPreferenceStore, PreferenceStore
from tripline.services.range_resolver import resolve_range
from tripline.services.throttle import ResizeThrottle
from tripline.services.zoom import ZoomController


class LogBuffer:
    """Bounded, thread-safe buffer of log entries for /api/logs."""

    MAX_ENTRIES = 1000

    def __init__(self):
        self.entries: Deque[dict] = deque(maxlen=self.MAX_ENTRIES)
        self.lock = threading.Lock()

    def add(self, level: str, message: str, data: Optional[dict] = None):
        """Append an entry; the oldest is dropped when full."""
        with self.lock:
            self.entries.append({
                "timestamp": datetime.now().isoformat(),
                "level": level,
                "message": message,
                "data": data,
            })

    def get_all(self) -> List[dict]:
        with self.lock:
            return list(self.entries)

    def clear(self):
        with self.lock:
            self.entries.clear()


# Global log buffer
log_buffer = LogBuffer()


class AppState:
    """Global application state.

    The layout is a derived value: any change of the trip or the zoom
    drops the cached layout and the next read recomputes it.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.config: Optional[Config] = None
        self.layout_config: LayoutConfig = LayoutConfig()
        self.trip: Trip = Trip()
        self.zoom: ZoomController = ZoomController(config=self.layout_config, on_change=self._on_zoom_change)
        self.resize_throttle: ResizeThrottle = ResizeThrottle(self.resize_container)
        self._layout: Optional[TimelineLayout] = None

    def configure(
        self,
        trip: Trip,
        config: Optional[Config] = None,
        store: Optional[PreferenceStore] = None,
    ) -> None:
        """Install a trip and rebuild zoom state."""
        with self.lock:
            self.resize_throttle.cancel()
            self.config = config
            self.layout_config = config.layout if config else LayoutConfig()
            self.zoom = ZoomController(
                store=store if store is not None else MemoryPreferenceStore(),
                config=self.layout_config,
                on_change=self._on_zoom_change,
            )
            self.resize_throttle = ResizeThrottle(
                self.resize_container,
                interval=self.layout_config.resize_throttle,
            )
            self.set_trip(trip)

    @property
    def locations(self) -> Dict[str, Location]:
        return self.trip.locations

    @property
    def steps(self) -> List[Step]:
        return self.trip.sorted_steps()

    def set_trip(self, trip: Trip) -> None:
        """Replace the trip snapshot."""
        with self.lock:
            self.trip = trip
            self._layout = None
            window = resolve_range(self.trip.sorted_steps(), self.trip.locations)
            self.zoom.on_range_change(window.days)

    def get_layout(self) -> TimelineLayout:
        """Current layout, recomputed when inputs changed."""
        with self.lock:
            if self._layout is None:
                builder = GridBuilder(self.layout_config)
                self._layout = builder.build(self.trip.sorted_steps(), self.trip.locations, self.zoom.day_width)
            return self._layout

    def resize_container(self, width: float) -> None:
        """Apply a container width; runs on the throttle timer thread too."""
        with self.lock:
            self.zoom.on_container_resize(width)

    def days_in_range(self) -> int:
        return resolve_range(self.trip.sorted_steps(), self.trip.locations).days

    def _on_zoom_change(self, _zoom: ZoomController) -> None:
        with self.lock:
            self._layout = None


# Global app state
app_state = AppState()
