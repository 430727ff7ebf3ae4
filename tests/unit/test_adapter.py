"""
Unit tests for calendar payload parsing and response serialization.
"""

from datetime import date, datetime, timezone

import pytest

from availability.adapter import (
    parse_busy_interval,
    parse_busy_intervals,
    serialize_block,
    serialize_result,
    serialize_slot,
)
from models.request import AvailabilityResult
from models.slot import AvailableBlock, BusyInterval, CandidateSlot


class TestParseBusyIntervals:
    """Test conversion of raw calendar events."""

    def test_plain_iso_strings(self, tz):
        interval = parse_busy_interval(
            {"start": "2024-01-16T20:00:00Z", "end": "2024-01-16T20:30:00Z", "summary": "Call"},
            tz,
        )

        assert interval.busy is True
        assert interval.summary == "Call"
        assert interval.start == datetime(2024, 1, 16, 20, 0, tzinfo=timezone.utc)

    def test_google_style_payload(self, tz):
        interval = parse_busy_interval(
            {
                "start": {"dateTime": "2024-01-16T12:00:00-08:00"},
                "end": {"dateTime": "2024-01-16T12:30:00-08:00"},
                "transparency": "transparent",
            },
            tz,
        )

        assert interval.busy is False

    def test_all_day_event_uses_local_midnight(self, tz):
        interval = parse_busy_interval(
            {"start": {"date": "2024-01-16"}, "end": {"date": "2024-01-17"}}, tz
        )

        assert interval.start == datetime(2024, 1, 16, tzinfo=tz)
        assert interval.end == datetime(2024, 1, 17, tzinfo=tz)

    def test_date_and_naive_datetime_values(self, tz):
        interval = parse_busy_interval(
            {"start": date(2024, 1, 16), "end": datetime(2024, 1, 16, 9, 0), "busy": True},
            tz,
        )

        assert interval.start.tzinfo is tz
        assert interval.end.tzinfo is tz

    def test_existing_interval_passes_through(self, tz, busy):
        interval = busy((12, 0), (12, 30))

        assert parse_busy_interval(interval, tz) is interval

    @pytest.mark.parametrize(
        "event",
        [
            {"start": "2024-01-16T12:00:00"},
            {"end": "2024-01-16T12:00:00"},
            {"start": "not a date", "end": "2024-01-16T12:00:00"},
            {"start": "2024-01-16T13:00:00", "end": "2024-01-16T12:00:00"},
            {"start": 42, "end": 43},
            "2024-01-16T12:00:00",
        ],
    )
    def test_malformed_event_rejected(self, tz, event):
        with pytest.raises(ValueError):
            parse_busy_interval(event, tz)

    def test_malformed_events_skipped(self, tz):
        events = [
            {"start": "2024-01-16T12:00:00", "end": "2024-01-16T12:30:00"},
            {"start": "2024-01-16T12:00:00"},
            {"start": "garbage", "end": "garbage"},
        ]

        intervals = parse_busy_intervals(events, tz)

        assert len(intervals) == 1
        assert isinstance(intervals[0], BusyInterval)


class TestSerialization:
    """Test JSON output shapes."""

    def test_block_local_format(self, tz):
        block = AvailableBlock(
            start=datetime(2024, 1, 16, 19, 0, tzinfo=timezone.utc),
            end=datetime(2024, 1, 16, 20, 30, tzinfo=timezone.utc),
        )

        data = serialize_block(block, tz)

        assert data == {
            "start": "2024-01-16T11:00:00",
            "end": "2024-01-16T12:30:00",
            "available": True,
            "durationMinutes": 90,
        }

    def test_slot_includes_reason(self, tz, at):
        slot = CandidateSlot(
            start=at(2024, 1, 16, 12, 0),
            end=at(2024, 1, 16, 12, 30),
            available=False,
            reason="Booked: Dentist",
        )

        data = serialize_slot(slot, tz)

        assert data["available"] is False
        assert data["reason"] == "Booked: Dentist"
        assert data["start"] == "2024-01-16T12:00:00"

    def test_result_grouped(self, tz, at):
        block = AvailableBlock(start=at(2024, 1, 16, 11, 0), end=at(2024, 1, 16, 12, 0))
        result = AvailabilityResult(
            category="friends",
            subcategory="lunch",
            start=at(2024, 1, 16),
            end=at(2024, 1, 16, 23, 59),
            blocks=[block],
            by_day={"2024-01-16": [block]},
            total_events=3,
        )

        body = serialize_result(result, tz)

        assert body["startDate"] == "2024-01-16T00:00:00"
        assert body["totalEvents"] == 3
        assert list(body["availability"]) == ["2024-01-16"]
        assert body["availability"]["2024-01-16"][0]["end"] == "2024-01-16T12:00:00"
        assert "warning" not in body

    def test_result_unknown_pair_has_warning(self, tz, at):
        result = AvailabilityResult(
            category="friends",
            subcategory="karaoke",
            start=at(2024, 1, 16),
            end=at(2024, 1, 16),
            constraint_found=False,
        )

        body = serialize_result(result, tz)

        assert body["availability"] == []
        assert "friends/karaoke" in body["warning"]
