"""Models for locations and their coordinates."""

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinates:
    """Geographic coordinates in decimal degrees."""

    lat: float
    lng: float

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["Coordinates"]:
        """Parse a {"lat": ..., "lng": ...} mapping.

        Returns:
            Coordinates or None if parsing fails
        """
        if not isinstance(data, dict):
            return None
        try:
            lat = float(data["lat"])
            lng = float(data["lng"])
        except (KeyError, TypeError, ValueError):
            return None
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return None
        return cls(lat=lat, lng=lng)

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    def __str__(self) -> str:
        return f"{self.lat:.6f}, {self.lng:.6f}"


@dataclass(frozen=True)
class Location:
    """A place on the itinerary with its own fixed UTC offset."""

    id: str
    name: str
    coordinates: Coordinates
    timezone_offset: int = 0  # whole hours, -12..+12

    @property
    def lat(self) -> float:
        return self.coordinates.lat

    @property
    def lng(self) -> float:
        return self.coordinates.lng

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "coordinates": self.coordinates.to_dict(),
            "timezone": self.timezone_offset,
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.coordinates})"
