"""Sunrise and sunset from a simplified solar position model.

Good enough to shade a timeline, not for navigation: no atmospheric
refraction, no altitude, declination from the mean ecliptic longitude.
"""

import math
from datetime import date, timedelta
from typing import Dict, Union

from tripline.core.logger import log_warning
from tripline.models.timeline import DaylightWindow

DateLike = Union[date, str]

OBLIQUITY = 23.44  # degrees
J2000 = 2451545.0


def _to_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _clamp(value: float, low: float, high: float, name: str) -> float:
    if math.isnan(value):
        log_warning(f"{name} is not a number, using 0")
        return 0.0
    if value < low or value > high:
        clamped = max(low, min(high, value))
        log_warning(f"{name} {value} out of range, clamped to {clamped}")
        return clamped
    return value


def julian_day(day: date) -> int:
    """Julian day number of a Gregorian calendar date."""
    a = (14 - day.month) // 12
    y = day.year + 4800 - a
    m = day.month + 12 * a - 3
    return day.day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045


def _format_minutes(minutes: float) -> str:
    minutes = minutes % 1440
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    return f"{hours:02d}:{mins:02d}"


def calculate_daylight(lat: float, lng: float, day: DateLike, utc_offset: int) -> DaylightWindow:
    """Calculate local sunrise and sunset.

    Args:
        lat: Latitude in degrees, clamped to [-90, 90]
        lng: Longitude in degrees (east positive), clamped to [-180, 180]
        day: Calendar date or "YYYY-MM-DD"
        utc_offset: Location's UTC offset in hours

    Returns:
        DaylightWindow; polar night and polar day are data, never errors
    """
    lat = _clamp(lat, -90.0, 90.0, "latitude")
    lng = _clamp(lng, -180.0, 180.0, "longitude")

    n = julian_day(_to_date(day)) - J2000
    mean_longitude = (280.460 + 0.9856474 * n) % 360
    mean_anomaly = math.radians((357.528 + 0.9856003 * n) % 360)
    ecliptic_longitude = (
        mean_longitude + 1.915 * math.sin(mean_anomaly) + 0.020 * math.sin(2 * mean_anomaly)
    ) % 360

    declination = math.asin(math.sin(math.radians(OBLIQUITY)) * math.sin(math.radians(ecliptic_longitude)))

    # tan(±90°) is huge but finite, so the poles land in the polar branches
    cos_h = -math.tan(math.radians(lat)) * math.tan(declination)
    if cos_h > 1:
        return DaylightWindow.polar_night()
    if cos_h < -1:
        return DaylightWindow.polar_day()

    hour_angle = math.degrees(math.acos(cos_h))

    # L and λ are normalized separately; keep their difference small
    drift = (mean_longitude - 0.0057183 - ecliptic_longitude + 180) % 360 - 180
    equation_of_time = 4 * drift
    solar_noon = 720 + equation_of_time - lng * 4

    sunrise = solar_noon - hour_angle * 4 + utc_offset * 60
    sunset = solar_noon + hour_angle * 4 + utc_offset * 60

    return DaylightWindow(
        sunrise_local=_format_minutes(sunrise),
        sunset_local=_format_minutes(sunset),
        is_polar_night=False,
    )


def calculate_daylight_for_range(
    lat: float, lng: float, start: DateLike, end: DateLike, utc_offset: int
) -> Dict[str, DaylightWindow]:
    """Daylight for every date from start to end, inclusive, keyed by ISO date."""
    current = _to_date(start)
    last = _to_date(end)
    result = {}
    while current <= last:
        result[current.isoformat()] = calculate_daylight(lat, lng, current, utc_offset)
        current += timedelta(days=1)
    return result
