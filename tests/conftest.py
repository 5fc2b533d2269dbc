"""Shared fixtures."""

from datetime import datetime, timezone

import pytest

from tripline.core import logger
from tripline.models.location import Coordinates, Location
from tripline.models.step import Step
from tripline.models.trip import Trip


def utc_ms(year, month, day, hour=0, minute=0) -> int:
    """Epoch millis of a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp()) * 1000


@pytest.fixture(autouse=True)
def quiet_logger():
    logger.set_verbose(False)
    logger.set_web_mode(False)
    yield
    logger.set_web_mode(False)


@pytest.fixture
def paris() -> Location:
    return Location(id="paris", name="Paris", coordinates=Coordinates(lat=48.85, lng=2.35), timezone_offset=1)


@pytest.fixture
def tokyo() -> Location:
    return Location(id="tokyo", name="Tokyo", coordinates=Coordinates(lat=35.68, lng=139.69), timezone_offset=9)


@pytest.fixture
def flight(paris, tokyo) -> Step:
    """Paris 2024-06-01 09:00 (+1) → Tokyo 2024-06-02 05:00 (+9)."""
    return Step.move(
        id="flight",
        start_location_id=paris.id,
        finish_location_id=tokyo.id,
        start_timestamp=utc_ms(2024, 6, 1, 8),
        finish_timestamp=utc_ms(2024, 6, 1, 20),
        start_date="2024-06-01T09:00",
        finish_date="2024-06-02T05:00",
    )


@pytest.fixture
def trip(paris, tokyo, flight) -> Trip:
    return Trip(locations={paris.id: paris, tokyo.id: tokyo}, steps=[flight])
