"""Date and time helpers working on epoch millis and fixed hour offsets."""

from datetime import date, datetime, timedelta, timezone
from typing import List, Union

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000

_EPOCH = datetime(1970, 1, 1)


def format_tz(offset: int) -> str:
    """Convert an hour offset to an ISO suffix.

    0 → "Z", 3 → "+03:00", -10 → "-10:00"
    """
    if offset > 0:
        return f"+{offset:02d}:00"
    if offset < 0:
        return f"-{-offset:02d}:00"
    return "Z"


def local_datetime(timestamp: int, offset: int) -> datetime:
    """Naive wall-clock time of a timestamp at the given offset."""
    return _EPOCH + timedelta(milliseconds=timestamp + offset * MS_PER_HOUR)


def local_date(timestamp: int, offset: int) -> date:
    return local_datetime(timestamp, offset).date()


def local_hour(timestamp: int, offset: int) -> int:
    return local_datetime(timestamp, offset).hour


def format_as_ymd(timestamp: int, offset: int) -> str:
    return local_date(timestamp, offset).isoformat()


def format_iso_with_tz(timestamp: int, offset: int) -> str:
    """Local date and time as "YYYY-MM-DDTHH:MM"."""
    return local_datetime(timestamp, offset).strftime("%Y-%m-%dT%H:%M")


def _to_millis(value: datetime) -> int:
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def day_begin_timestamp(day: Union[date, str, int], offset: int) -> int:
    """Timestamp of local midnight of a day.

    Args:
        day: Calendar date, "YYYY-MM-DD" string, or a timestamp whose
            local date is used
        offset: UTC offset in hours
    """
    if isinstance(day, int):
        day = local_date(day, offset)
    elif isinstance(day, str):
        day = date.fromisoformat(day[:10])
    midnight = datetime(day.year, day.month, day.day)
    return _to_millis(midnight) - offset * MS_PER_HOUR


def dates_between(begin: int, end: int, offset: int) -> List[str]:
    """All local dates from begin to end (inclusive) as "YYYY-MM-DD"."""
    current = local_date(begin, offset)
    last = local_date(end, offset)
    dates = []
    while current <= last:
        dates.append(current.isoformat())
        current += timedelta(days=1)
    return dates


def parse_local_datetime(value: str) -> datetime:
    """Parse an ISO date or date-time string.

    Raises:
        ValueError: If the string is not ISO 8601
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def local_to_timestamp(value: str, offset: int) -> int:
    """Convert a local ISO string to epoch millis.

    Naive strings are read as wall-clock time at `offset`; strings with
    their own offset (or "Z") keep it.

    Raises:
        ValueError: If the string is not ISO 8601
    """
    parsed = parse_local_datetime(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return _to_millis(parsed)
    return _to_millis(parsed) - offset * MS_PER_HOUR


def clock_time(value: str) -> str:
    """Cut "HH:MM" out of an ISO date-time string ("00:00" for bare dates)."""
    if "T" in value:
        return value.split("T", 1)[1][:5]
    if " " in value.strip():
        return value.strip().split(" ", 1)[1][:5]
    return "00:00"


def format_duration(begin: int, end: int) -> str:
    """Elapsed time in narrow style, e.g. "5h 30m"."""
    total_minutes = max(0, end - begin) // MS_PER_MINUTE
    hours, minutes = divmod(total_minutes, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    return " ".join(parts) if parts else "0m"


def format_human_datetime(value: str) -> str:
    """Format an ISO string like "31.01.2025 20:52"."""
    if not value:
        return ""
    return parse_local_datetime(value).strftime("%d.%m.%Y %H:%M")
