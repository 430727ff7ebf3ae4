"""
Input validation utilities for availability query parameters.
"""

import re
from datetime import datetime, tzinfo
from typing import Optional

from utils.constants import MAX_MIN_DURATION_MINUTES
from utils.datetime_utils import parse_iso_datetime
from utils.exceptions import ValidationError

_TOKEN_PATTERN = re.compile(r"^[a-z][a-z0-9_\-]{0,63}$")
_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


def validate_token(token: str) -> bool:
    """
    Validate a category or subcategory identifier.

    Args:
        token: Identifier such as "friends" or "trips_multi_day"

    Returns:
        True if valid format, False otherwise
    """
    if not token or not isinstance(token, str):
        return False
    return bool(_TOKEN_PATTERN.match(token.lower()))


def normalize_token(token: str) -> str:
    """Lower-case a token and map dashes to underscores."""
    return token.strip().lower().replace("-", "_")


def parse_flag(value: Optional[str]) -> bool:
    """
    Parse a boolean query flag.

    Raises:
        ValidationError: If the value is not a recognised boolean
    """
    if value is None:
        return False
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid boolean flag: {value!r}")


def parse_min_duration(value: Optional[str]) -> Optional[int]:
    """
    Parse a minimum meeting duration in minutes.

    Returns:
        Duration in minutes, or None when not supplied

    Raises:
        ValidationError: If the value is not a positive integer within a day
    """
    if value is None or value == "":
        return None
    try:
        minutes = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"minDuration must be an integer, got {value!r}") from e

    if minutes < 1 or minutes > MAX_MIN_DURATION_MINUTES:
        raise ValidationError(
            f"minDuration must be between 1 and {MAX_MIN_DURATION_MINUTES} minutes"
        )
    return minutes


def parse_datetime_param(
    name: str, value: Optional[str], tz: Optional[tzinfo] = None
) -> datetime:
    """
    Parse a required ISO datetime parameter.

    Raises:
        ValidationError: If missing or unparseable
    """
    if not value:
        raise ValidationError(f"{name} is required (ISO format)")
    try:
        return parse_iso_datetime(value, tz)
    except ValueError as e:
        raise ValidationError(
            f"Invalid {name} date format. Use ISO format (e.g., 2024-01-15T10:00:00Z)"
        ) from e


def validate_date_range(start: datetime, end: datetime, max_days: int) -> None:
    """
    Check that a date range is ordered and not too long.

    Raises:
        ValidationError: If end precedes start or the range is too long
    """
    if end < start:
        raise ValidationError("end must not be before start")
    if (end - start).days > max_days:
        raise ValidationError(f"Date range may not exceed {max_days} days")
