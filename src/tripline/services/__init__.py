"""Services for Tripline."""

from tripline.services.daylight import calculate_daylight, calculate_daylight_for_range
from tripline.services.grid_builder import GridBuilder, build_layout, recompute
from tripline.services.position import convert_position_to_style, layout_to_dict
from tripline.services.preferences import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore
from tripline.services.range_resolver import TimelineRange, TimelineRangeResolver, resolve_range
from tripline.services.throttle import ResizeThrottle
from tripline.services.trip_loader import TripLoader, load_trip
from tripline.services.zoom import ZoomController

__all__ = [
    "calculate_daylight",
    "calculate_daylight_for_range",
    "GridBuilder",
    "build_layout",
    "recompute",
    "convert_position_to_style",
    "layout_to_dict",
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "TimelineRange",
    "TimelineRangeResolver",
    "resolve_range",
    "ResizeThrottle",
    "TripLoader",
    "load_trip",
    "ZoomController",
]
