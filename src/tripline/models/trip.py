"""Model for a whole itinerary."""

from dataclasses import dataclass, field
from typing import Dict, List

from tripline.models.location import Location
from tripline.models.step import Step


@dataclass
class Trip:
    """Snapshot of locations and steps."""

    locations: Dict[str, Location] = field(default_factory=dict)
    steps: List[Step] = field(default_factory=list)

    def sorted_steps(self) -> List[Step]:
        """Steps ordered by start time (stable)."""
        return sorted(self.steps, key=lambda s: s.start_timestamp)
