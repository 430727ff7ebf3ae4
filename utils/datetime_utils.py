"""
Datetime utilities for consistent local-time handling.

The constraint table is written in wall-clock hours of a single configured
zone, so engine code converts every instant into that zone before reasoning
about calendar days or times of day.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterator, Optional

from utils.constants import LOCAL_DATETIME_FORMAT, TIME_OF_DAY_FORMAT


def local_zone(tz: Optional[tzinfo] = None) -> tzinfo:
    """Return tz, or the configured application timezone."""
    if tz is not None:
        return tz
    from config import settings

    return settings.get_timezone()


def to_local(dt: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert a datetime to the local zone.

    Naive datetimes are taken to already be local wall-clock time.

    Args:
        dt: Datetime (timezone-aware or naive)
        tz: Target zone (defaults to the configured zone)

    Returns:
        Timezone-aware datetime in the local zone
    """
    zone = local_zone(tz)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=zone)
    return dt.astimezone(zone)


def parse_time_of_day(value: str) -> time:
    """
    Parse an HH:mm string.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    try:
        return datetime.strptime(value, TIME_OF_DAY_FORMAT).time()
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid time of day: {value!r}") from e


def parse_iso_datetime(iso_string: str, tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse ISO format datetime string to a timezone-aware datetime.
    Handles the 'Z' suffix, explicit offsets and bare dates.

    Args:
        iso_string: ISO format datetime string
        tz: Zone applied when the string carries no offset

    Returns:
        Timezone-aware datetime object

    Raises:
        ValueError: If datetime string cannot be parsed
    """
    if not isinstance(iso_string, str) or not iso_string.strip():
        raise ValueError(f"Invalid datetime string: {iso_string!r}")

    normalized = iso_string.strip().replace("Z", "+00:00")

    try:
        dt = datetime.fromisoformat(normalized)
    except ValueError as e:
        raise ValueError(f"Invalid datetime string: {iso_string}") from e

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=local_zone(tz))
    return dt


def weekday_index(day: date) -> int:
    """Day of week with 0=Sunday..6=Saturday."""
    return day.isoweekday() % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def to_utc(dt: datetime) -> datetime:
    """The instant dt denotes, in UTC. Naive datetimes are returned unchanged."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc)


def existing(dt: datetime) -> datetime:
    """
    Resolve a wall-clock time skipped by a DST jump to the real instant
    it maps onto, e.g. 02:30 on a spring-forward night becomes 03:30.
    """
    if dt.tzinfo is None:
        return dt
    return to_utc(dt).astimezone(dt.tzinfo)


def elapsed(start: datetime, end: datetime) -> timedelta:
    """Real time between two datetimes, unaffected by DST jumps."""
    return to_utc(end) - to_utc(start)


def shift(dt: datetime, delta: timedelta, tz: Optional[tzinfo] = None) -> datetime:
    """Move dt forward by delta of real time, expressed in the local zone."""
    zone = local_zone(tz)
    return (to_utc(to_local(dt, zone)) + delta).astimezone(zone)


def at_time(day: date, tod: time, tz: Optional[tzinfo] = None) -> datetime:
    """Combine a calendar date and a time of day in the local zone."""
    return existing(datetime.combine(day, tod, tzinfo=local_zone(tz)))


def next_midnight(dt: datetime) -> datetime:
    """Start of the calendar day following dt, in dt's zone."""
    following = dt.date() + timedelta(days=1)
    return existing(datetime.combine(following, time(0, 0), tzinfo=dt.tzinfo))


def format_local_datetime(dt: datetime, tz: Optional[tzinfo] = None) -> str:
    """
    Format a datetime as local time without an offset suffix.

    Returns:
        String like 2024-01-16T11:00:00
    """
    return to_local(dt, tz).strftime(LOCAL_DATETIME_FORMAT)
