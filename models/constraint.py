"""Availability constraint models: weekly opening windows per meeting type."""

from datetime import time
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from utils.constants import DAYS_IN_WEEK
from utils.datetime_utils import parse_time_of_day


class BookingCategory(str, Enum):
    """Top-level meeting categories."""

    PROFESSIONAL = "professional"
    FRIENDS = "friends"
    KID_ACTIVITIES = "kid_activities"


class BookingSubcategory(str, Enum):
    """Meeting subcategories."""

    JOB_INTERVIEW = "job_interview"
    NETWORKING = "networking"
    CONSULTATION = "consultation"
    COLLABORATION = "collaboration"
    COFFEE = "coffee"
    LUNCH = "lunch"
    DINNER = "dinner"
    BRUNCH = "brunch"
    OUTINGS = "outings"
    TRIPS_MULTI_DAY = "trips_multi_day"


def days_in_range(start_day: int, end_day: int) -> FrozenSet[int]:
    """
    Expand an inclusive day-of-week range into a set of day indexes.

    A range whose start is after its end wraps past Saturday,
    so (5, 1) covers Friday through Monday.
    """
    if start_day <= end_day:
        return frozenset(range(start_day, end_day + 1))
    return frozenset(
        day for day in range(DAYS_IN_WEEK) if day >= start_day or day <= end_day
    )


class AvailabilityConstraint(BaseModel):
    """Opening hours for one (category, subcategory) pair."""

    category: BookingCategory
    subcategory: BookingSubcategory
    weekday_start: int = Field(..., ge=0, le=6, description="0=Sunday")
    weekday_end: int = Field(..., ge=0, le=6)
    start_time: str = Field(..., description="HH:mm")
    end_time: str = Field(..., description="HH:mm")
    weekend_start: Optional[int] = Field(default=None, ge=0, le=6)
    weekend_end: Optional[int] = Field(default=None, ge=0, le=6)
    weekend_start_time: Optional[str] = None
    weekend_end_time: Optional[str] = None

    class Config:
        frozen = True
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "category": "friends",
                "subcategory": "coffee",
                "weekday_start": 1,
                "weekday_end": 5,
                "start_time": "07:00",
                "end_time": "14:00",
                "weekend_start": 0,
                "weekend_end": 0,
                "weekend_start_time": "07:00",
                "weekend_end_time": "14:00",
            }
        }

    @field_validator("start_time", "end_time", "weekend_start_time", "weekend_end_time")
    @classmethod
    def _check_time_format(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_time_of_day(value)
        return value

    @model_validator(mode="after")
    def _check_windows(self) -> "AvailabilityConstraint":
        if parse_time_of_day(self.start_time) >= parse_time_of_day(self.end_time):
            raise ValueError("start_time must be before end_time")

        weekend_fields = (
            self.weekend_start,
            self.weekend_end,
            self.weekend_start_time,
            self.weekend_end_time,
        )
        if any(f is not None for f in weekend_fields):
            if any(f is None for f in weekend_fields):
                raise ValueError("weekend window must define all four weekend fields")
            if parse_time_of_day(self.weekend_start_time) >= parse_time_of_day(
                self.weekend_end_time
            ):
                raise ValueError("weekend_start_time must be before weekend_end_time")
            if self.weekday_days & self.weekend_days:
                raise ValueError("weekday and weekend day ranges overlap")
        return self

    @property
    def key(self) -> str:
        return f"{self.category}:{self.subcategory}"

    @property
    def has_weekend_window(self) -> bool:
        return self.weekend_start_time is not None

    @property
    def weekday_days(self) -> FrozenSet[int]:
        return days_in_range(self.weekday_start, self.weekday_end)

    @property
    def weekend_days(self) -> FrozenSet[int]:
        if not self.has_weekend_window:
            return frozenset()
        return days_in_range(self.weekend_start, self.weekend_end)

    def window_for(self, day_index: int) -> Optional[Tuple[time, time]]:
        """
        Opening window for a day of the week.

        Args:
            day_index: 0=Sunday..6=Saturday

        Returns:
            (opens, closes) times, or None if closed that day
        """
        if self.has_weekend_window and day_index in self.weekend_days:
            return (
                parse_time_of_day(self.weekend_start_time),
                parse_time_of_day(self.weekend_end_time),
            )
        if day_index in self.weekday_days:
            return parse_time_of_day(self.start_time), parse_time_of_day(self.end_time)
        return None
