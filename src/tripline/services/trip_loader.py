"""Loading and parsing trip JSON."""

import json
from pathlib import Path
from typing import Dict, Optional

from tripline.core.exceptions import TripParseError
from tripline.core.logger import log_call, log_result, log_warning
from tripline.models.location import Coordinates, Location
from tripline.models.step import Step
from tripline.models.trip import Trip
from tripline.services.timeutils import local_to_timestamp


class TripLoader:
    """Loads a trip document: {"locations": [...], "steps": [...]}."""

    def load(self, path: Path) -> Trip:
        """Load a trip JSON file.

        Args:
            path: Path to the JSON file

        Returns:
            Trip with steps sorted by start time

        Raises:
            TripParseError: If the file cannot be loaded or parsed
        """
        log_call("TripLoader", "load", path=str(path))

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise TripParseError(f"Invalid JSON format: {e}")
        except FileNotFoundError:
            raise TripParseError(f"File not found: {path}")
        except OSError as e:
            raise TripParseError(f"Error reading file: {e}")

        trip = self.parse(data)
        log_result("TripLoader", "load", f"{len(trip.locations)} locations, {len(trip.steps)} steps")
        return trip

    def parse(self, data: object) -> Trip:
        """Build a Trip from already decoded JSON.

        Raises:
            TripParseError: If the top-level shape is wrong
        """
        if not isinstance(data, dict):
            raise TripParseError("Expected an object with 'locations' and 'steps'")

        locations = self._parse_locations(data.get("locations", []))

        raw_steps = data.get("steps", [])
        if not isinstance(raw_steps, list):
            raise TripParseError("Expected 'steps' to be a list")

        steps = []
        for record in raw_steps:
            step = self._parse_step(record, locations)
            if step:
                steps.append(step)

        steps.sort(key=lambda s: s.start_timestamp)
        return Trip(locations=locations, steps=steps)

    def _parse_locations(self, raw: object) -> Dict[str, Location]:
        """Accepts a list of records or a mapping keyed by id."""
        if isinstance(raw, dict):
            records = [dict(value, id=value.get("id", key)) for key, value in raw.items() if isinstance(value, dict)]
        elif isinstance(raw, list):
            records = raw
        else:
            raise TripParseError("Expected 'locations' to be a list or an object")

        locations: Dict[str, Location] = {}
        for record in records:
            location = self._parse_location(record)
            if location:
                locations[location.id] = location
        return locations

    def _parse_location(self, record: object) -> Optional[Location]:
        if not isinstance(record, dict):
            return None

        location_id = record.get("id") or record.get("name")
        coordinates = Coordinates.from_dict(record.get("coordinates"))
        if not location_id or not coordinates:
            log_warning(f"location skipped, missing id or coordinates: {record.get('name')}")
            return None

        try:
            offset = int(record.get("timezone", 0))
        except (TypeError, ValueError):
            log_warning(f"location {location_id}: invalid timezone, using UTC")
            offset = 0

        return Location(
            id=str(location_id),
            name=str(record.get("name") or location_id),
            coordinates=coordinates,
            timezone_offset=max(-12, min(12, offset)),
        )

    def _parse_step(self, record: object, locations: Dict[str, Location]) -> Optional[Step]:
        """Parse one step record; invalid records are skipped with a warning."""
        if not isinstance(record, dict):
            return None

        step_id = str(record.get("id", ""))
        kind = record.get("type")
        start_location = record.get("startLocation")
        finish_location = record.get("finishLocation")

        if kind not in ("move", "stay") or not start_location:
            log_warning(f"step {step_id} skipped, invalid type or start location")
            return None
        if kind == "move" and not finish_location:
            log_warning(f"step {step_id} skipped, move without finish location")
            return None

        start_date = record.get("startDate") or ""
        finish_date = record.get("finishDate") or ""
        finish_tz_location = finish_location if kind == "move" else start_location

        try:
            start_timestamp = self._timestamp(record.get("startTimestamp"), start_date, start_location, locations)
            finish_timestamp = self._timestamp(record.get("finishTimestamp"), finish_date, finish_tz_location, locations)
        except (ValueError, TypeError, AttributeError) as e:
            log_warning(f"step {step_id} skipped, invalid date: {e}")
            return None

        if finish_timestamp < start_timestamp:
            log_warning(f"step {step_id} skipped, finishes before it starts")
            return None

        if kind == "stay":
            return Step.stay(
                id=step_id,
                location_id=str(start_location),
                start_timestamp=start_timestamp,
                finish_timestamp=finish_timestamp,
                start_date=start_date,
                finish_date=finish_date,
                description=record.get("description"),
            )
        return Step.move(
            id=step_id,
            start_location_id=str(start_location),
            finish_location_id=str(finish_location),
            start_timestamp=start_timestamp,
            finish_timestamp=finish_timestamp,
            start_date=start_date,
            finish_date=finish_date,
            description=record.get("description"),
            start_airport=self._airport(record.get("startAirport")),
            finish_airport=self._airport(record.get("finishAirport")),
        )

    def _timestamp(
        self,
        explicit: object,
        iso_value: str,
        location_id: str,
        locations: Dict[str, Location],
    ) -> int:
        """Explicit epoch millis win; otherwise the local ISO date is converted.

        Raises:
            ValueError: If neither is usable
        """
        if isinstance(explicit, (int, float)) and not isinstance(explicit, bool):
            return int(explicit)
        if not iso_value:
            raise ValueError("missing date")
        location = locations.get(location_id)
        offset = location.timezone_offset if location else 0
        return local_to_timestamp(iso_value, offset)

    @staticmethod
    def _airport(value: object) -> Optional[str]:
        if isinstance(value, str) and len(value.strip()) == 3:
            return value.strip().upper()
        return None


def load_trip(path: Path) -> Trip:
    """Shortcut for TripLoader().load(path)."""
    return TripLoader().load(path)

