"""Zoom state of the timeline: pixels representing one day."""

from typing import Callable, Optional, Union

from tripline.core.config import LayoutConfig
from tripline.core.logger import log_call, log_info, log_result
from tripline.services.preferences import MemoryPreferenceStore, PreferenceStore

FIT = "fit"
ZOOM_PREFERENCE_KEY = "timeline-zoom"


class ZoomController:
    """Owns the day width; discrete ladder steps or continuous fit-to-width."""

    def __init__(
        self,
        store: Optional[PreferenceStore] = None,
        config: Optional[LayoutConfig] = None,
        on_change: Optional[Callable[["ZoomController"], None]] = None,
    ):
        """
        Args:
            store: Where the chosen zoom is persisted
            config: Zoom ladder and default rung
            on_change: Called after every change of the day width or mode
        """
        self.config = config or LayoutConfig()
        self.ladder = tuple(sorted(self.config.zoom_ladder))
        self.store = store if store is not None else MemoryPreferenceStore()
        self.on_change = on_change

        self._index: Optional[int] = None  # None in fit mode
        self._last_index: Optional[int] = None
        self._fit_width: Optional[float] = None
        self._container_width: Optional[float] = None
        self._days_in_range = 0
        self._label_width: float = self.config.location_label_width
        self.day_width: float = self.config.default_day_width

        self._restore()

    # --- State ---

    @property
    def mode(self) -> Union[int, str]:
        """Ladder index, or "fit"."""
        return FIT if self._index is None else self._index

    @property
    def is_fit_zoom(self) -> bool:
        return self._index is None

    @property
    def is_min_zoom(self) -> bool:
        return self.day_width <= self.ladder[0]

    @property
    def is_max_zoom(self) -> bool:
        return self.day_width >= self.ladder[-1]

    def to_dict(self) -> dict:
        return {
            "day_width": self.day_width,
            "mode": self.mode,
            "is_fit_zoom": self.is_fit_zoom,
            "is_min_zoom": self.is_min_zoom,
            "is_max_zoom": self.is_max_zoom,
            "ladder": list(self.ladder),
        }

    # --- Discrete zoom ---

    def zoom_in(self) -> None:
        """Move to the next wider rung; no-op at the top."""
        larger = [i for i, width in enumerate(self.ladder) if width > self.day_width]
        if not larger:
            return
        self._set_index(larger[0])

    def zoom_out(self) -> None:
        """Move to the next narrower rung; no-op at the bottom."""
        smaller = [i for i, width in enumerate(self.ladder) if width < self.day_width]
        if not smaller:
            return
        self._set_index(smaller[-1])

    def zoom_to_rung(self, index: int) -> None:
        """Select a rung directly, clamped to the ladder."""
        self._set_index(max(0, min(len(self.ladder) - 1, index)))

    def exit_fit(self) -> None:
        """Leave fit mode for the rung nearest to the last fitted width."""
        if not self.is_fit_zoom:
            return
        if self._fit_width is not None:
            index = self.nearest_index(self._fit_width)
        elif self._last_index is not None:
            index = self._last_index
        else:
            index = self.config.default_zoom_index
        self._set_index(index)

    def nearest_index(self, width: float) -> int:
        """Index of the rung closest to `width` (lower rung on ties)."""
        return min(range(len(self.ladder)), key=lambda i: (abs(self.ladder[i] - width), i))

    # --- Fit zoom ---

    def zoom_to_fit(self, container_width: float, days_in_range: int, longest_label_width: float) -> None:
        """Derive the day width from the available container width."""
        log_call(
            "ZoomController",
            "zoom_to_fit",
            container_width=container_width,
            days=days_in_range,
            label_width=longest_label_width,
        )
        if self._index is not None:
            self._last_index = self._index
        self._index = None
        self._container_width = container_width
        self._days_in_range = days_in_range
        self._label_width = longest_label_width
        self._recompute_fit()
        self.store.set(ZOOM_PREFERENCE_KEY, FIT)
        log_result("ZoomController", "zoom_to_fit", self.day_width)
        self._notify()

    def on_container_resize(self, container_width: float) -> None:
        """Container width changed; recomputes the width in fit mode."""
        self._container_width = container_width
        if self.is_fit_zoom and self._recompute_fit():
            self._notify()

    def on_range_change(self, days_in_range: int) -> None:
        """Date range changed; recomputes the width in fit mode."""
        self._days_in_range = days_in_range
        if self.is_fit_zoom and self._recompute_fit():
            self._notify()

    def _recompute_fit(self) -> bool:
        """Returns True when the day width changed."""
        if self._container_width is None or self._days_in_range <= 0:
            return False
        raw = (self._container_width - self._label_width) / self._days_in_range
        width = max(self.ladder[0], min(self.ladder[-1], raw))
        self._fit_width = width
        if width == self.day_width:
            return False
        self.day_width = width
        return True

    # --- Internals ---

    def _set_index(self, index: int) -> None:
        self._index = index
        self._last_index = index
        self.day_width = self.ladder[index]
        self.store.set(ZOOM_PREFERENCE_KEY, self.day_width)
        self._notify()

    def _restore(self) -> None:
        """Restore the persisted zoom."""
        value = self.store.get(ZOOM_PREFERENCE_KEY)
        if value == FIT:
            self._index = None
            log_info("zoom restored: fit")
            return
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            self._index = self.nearest_index(value)
        else:
            self._index = self.config.default_zoom_index
        self._last_index = self._index
        self.day_width = self.ladder[self._index]
        log_info(f"zoom restored: {self.day_width}px/day")

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self)
