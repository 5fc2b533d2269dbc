"""Core modules for Tripline."""

from tripline.core.config import Config, LayoutConfig, ZOOM_LADDER
from tripline.core.exceptions import TriplineError, TripParseError
from tripline.core import logger

__all__ = ["Config", "LayoutConfig", "ZOOM_LADDER", "TriplineError", "TripParseError", "logger"]
