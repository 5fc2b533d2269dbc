"""Models for itinerary steps."""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union


@dataclass(frozen=True)
class Stay:
    """Remaining at one location."""

    kind: ClassVar[str] = "stay"

    location_id: str


@dataclass(frozen=True)
class Move:
    """Travelling from one location to another."""

    kind: ClassVar[str] = "move"

    start_location_id: str
    finish_location_id: str
    start_airport: Optional[str] = None  # IATA code, 3 letters
    finish_airport: Optional[str] = None


@dataclass(frozen=True)
class Step:
    """One itinerary step: a stay or a move between two instants."""

    id: str
    payload: Union[Stay, Move]
    start_timestamp: int  # epoch millis
    finish_timestamp: int  # epoch millis, >= start_timestamp
    start_date: str = ""  # local ISO string, only for labels
    finish_date: str = ""
    description: Optional[str] = None

    @classmethod
    def stay(
        cls,
        id: str,
        location_id: str,
        start_timestamp: int,
        finish_timestamp: int,
        start_date: str = "",
        finish_date: str = "",
        description: Optional[str] = None,
    ) -> "Step":
        return cls(
            id=id,
            payload=Stay(location_id=location_id),
            start_timestamp=start_timestamp,
            finish_timestamp=finish_timestamp,
            start_date=start_date,
            finish_date=finish_date,
            description=description,
        )

    @classmethod
    def move(
        cls,
        id: str,
        start_location_id: str,
        finish_location_id: str,
        start_timestamp: int,
        finish_timestamp: int,
        start_date: str = "",
        finish_date: str = "",
        description: Optional[str] = None,
        start_airport: Optional[str] = None,
        finish_airport: Optional[str] = None,
    ) -> "Step":
        return cls(
            id=id,
            payload=Move(
                start_location_id=start_location_id,
                finish_location_id=finish_location_id,
                start_airport=start_airport,
                finish_airport=finish_airport,
            ),
            start_timestamp=start_timestamp,
            finish_timestamp=finish_timestamp,
            start_date=start_date,
            finish_date=finish_date,
            description=description,
        )

    @property
    def kind(self) -> str:
        return self.payload.kind

    @property
    def is_move(self) -> bool:
        return isinstance(self.payload, Move)

    @property
    def is_stay(self) -> bool:
        return isinstance(self.payload, Stay)

    @property
    def start_location_id(self) -> str:
        if isinstance(self.payload, Move):
            return self.payload.start_location_id
        return self.payload.location_id

    @property
    def finish_location_id(self) -> str:
        """Finish location; a stay finishes where it started."""
        if isinstance(self.payload, Move):
            return self.payload.finish_location_id
        return self.payload.location_id

    @property
    def location_ids(self) -> Tuple[str, ...]:
        """Referenced location ids, start first."""
        if isinstance(self.payload, Move):
            return (self.payload.start_location_id, self.payload.finish_location_id)
        return (self.payload.location_id,)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": self.kind,
            "startTimestamp": self.start_timestamp,
            "finishTimestamp": self.finish_timestamp,
            "startDate": self.start_date,
            "finishDate": self.finish_date,
            "startLocation": self.start_location_id,
            "description": self.description,
        }
        if isinstance(self.payload, Move):
            data["finishLocation"] = self.payload.finish_location_id
            data["startAirport"] = self.payload.start_airport
            data["finishAirport"] = self.payload.finish_airport
        return data

    def __lt__(self, other: "Step") -> bool:
        """For sorting by start time."""
        return self.start_timestamp < other.start_timestamp
