"""Tripline - timeline layout and daylight engine for travel itineraries."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("tripline")
except PackageNotFoundError:
    # Fallback for development without installation
    __version__ = "0.0.0-dev"
