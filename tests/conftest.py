"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from models.slot import BusyInterval, CandidateSlot

LOCAL_TZ = ZoneInfo("America/Los_Angeles")


@pytest.fixture
def tz():
    """Local zone the constraint table is written in."""
    return LOCAL_TZ


@pytest.fixture
def at():
    """Build a local datetime: at(2024, 1, 16, 11, 30)."""

    def _at(year, month, day, hour=0, minute=0):
        return datetime(year, month, day, hour, minute, tzinfo=LOCAL_TZ)

    return _at


@pytest.fixture
def busy(at):
    """Build a busy interval on 2024-01-16 from (hour, minute) pairs."""

    def _busy(start, end, is_busy=True, summary="Meeting", day=16):
        return BusyInterval(
            start=at(2024, 1, day, *start),
            end=at(2024, 1, day, *end),
            busy=is_busy,
            summary=summary,
        )

    return _busy


@pytest.fixture
def slot(at):
    """Build a 30-minute candidate slot on 2024-01-16."""

    def _slot(hour, minute=0, available=True, day=16):
        start = at(2024, 1, day, hour, minute)
        end_minute = minute + 30
        end = at(2024, 1, day, hour + end_minute // 60, end_minute % 60)
        return CandidateSlot(start=start, end=end, available=available)

    return _slot


@pytest.fixture
def mock_settings():
    """Mock settings for the HTTP layer."""
    with patch("api.settings") as mock_settings:
        mock_settings.timezone = "America/Los_Angeles"
        mock_settings.get_timezone.return_value = LOCAL_TZ
        mock_settings.slot_duration_minutes = 30
        mock_settings.max_range_days = 92
        mock_settings.default_min_duration = None
        mock_settings.host = "0.0.0.0"
        mock_settings.port = 8000
        yield mock_settings
