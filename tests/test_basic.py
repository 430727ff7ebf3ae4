"""
Basic unit tests for models and the constraint table.
"""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from availability.constraints import AVAILABILITY_CONSTRAINTS
from models.constraint import (
    AvailabilityConstraint,
    BookingCategory,
    BookingSubcategory,
    days_in_range,
)
from models.request import AvailabilityRequest, BlockPolicy
from models.slot import AvailableBlock, BusyInterval


def test_booking_category_enum():
    """Test category enum values."""
    assert BookingCategory.PROFESSIONAL.value == "professional"
    assert BookingCategory.KID_ACTIVITIES.value == "kid_activities"


def test_booking_subcategory_enum():
    """Test subcategory enum values."""
    assert BookingSubcategory.TRIPS_MULTI_DAY.value == "trips_multi_day"
    assert BookingSubcategory.LUNCH in BookingSubcategory


def test_block_policy_enum():
    assert BlockPolicy("maximal_run") is BlockPolicy.MAXIMAL_RUN
    assert BlockPolicy.FIRST_FIT.value == "first_fit"


def test_days_in_range():
    assert days_in_range(1, 5) == {1, 2, 3, 4, 5}
    assert days_in_range(0, 0) == {0}
    assert days_in_range(0, 6) == set(range(7))
    # Wraps past Saturday
    assert days_in_range(5, 1) == {5, 6, 0, 1}


def test_constraint_table_is_unique():
    keys = [c.key for c in AVAILABILITY_CONSTRAINTS]
    assert len(keys) == len(set(keys))
    assert "friends:lunch" in keys


def test_constraint_rejects_inverted_window():
    with pytest.raises(PydanticValidationError):
        AvailabilityConstraint(
            category="friends",
            subcategory="coffee",
            weekday_start=1,
            weekday_end=5,
            start_time="14:00",
            end_time="07:00",
        )


def test_constraint_rejects_overlapping_ranges():
    with pytest.raises(PydanticValidationError):
        AvailabilityConstraint(
            category="friends",
            subcategory="coffee",
            weekday_start=0,
            weekday_end=5,
            start_time="07:00",
            end_time="14:00",
            weekend_start=0,
            weekend_end=0,
            weekend_start_time="07:00",
            weekend_end_time="14:00",
        )


def test_constraint_rejects_partial_weekend():
    with pytest.raises(PydanticValidationError):
        AvailabilityConstraint(
            category="friends",
            subcategory="coffee",
            weekday_start=1,
            weekday_end=5,
            start_time="07:00",
            end_time="14:00",
            weekend_start=0,
        )


def test_constraint_rejects_bad_time():
    with pytest.raises(PydanticValidationError):
        AvailabilityConstraint(
            category="friends",
            subcategory="dinner",
            weekday_start=0,
            weekday_end=6,
            start_time="6pm",
            end_time="23:59",
        )


def test_constraint_is_frozen():
    constraint = AVAILABILITY_CONSTRAINTS[0]
    with pytest.raises(PydanticValidationError):
        constraint.start_time = "09:00"


def test_busy_interval_order():
    start = datetime(2024, 1, 16, 12, 0)
    with pytest.raises(PydanticValidationError):
        BusyInterval(start=start, end=start - timedelta(minutes=1))


def test_busy_interval_overlap_is_half_open():
    start = datetime(2024, 1, 16, 12, 0)
    interval = BusyInterval(start=start, end=start + timedelta(minutes=30))

    assert interval.overlaps(start, start + timedelta(minutes=30))
    assert not interval.overlaps(start + timedelta(minutes=30), start + timedelta(hours=1))
    assert not interval.overlaps(start - timedelta(minutes=30), start)


def test_available_block_duration():
    start = datetime(2024, 1, 16, 12, 30)
    block = AvailableBlock(start=start, end=start + timedelta(minutes=90))
    assert block.duration_minutes == 90


def test_availability_request_validation():
    start = datetime(2024, 1, 16)
    with pytest.raises(PydanticValidationError):
        AvailabilityRequest(
            category="friends", subcategory="lunch", start=start, end=start - timedelta(days=1)
        )
    with pytest.raises(PydanticValidationError):
        AvailabilityRequest(
            category="friends", subcategory="lunch", start=start, end=start, min_duration=0
        )

    request = AvailabilityRequest(
        category="friends", subcategory="lunch", start=start, end=start
    )
    assert request.policy is BlockPolicy.MAXIMAL_RUN
    assert request.group_by_day is False
