"""Pydantic models for data validation and serialization."""

from .constraint import (
    AvailabilityConstraint,
    BookingCategory,
    BookingSubcategory,
    days_in_range,
)
from .request import AvailabilityRequest, AvailabilityResult, BlockPolicy
from .slot import AvailableBlock, BusyInterval, CandidateSlot

__all__ = [
    "AvailabilityConstraint",
    "AvailabilityRequest",
    "AvailabilityResult",
    "AvailableBlock",
    "BlockPolicy",
    "BookingCategory",
    "BookingSubcategory",
    "BusyInterval",
    "CandidateSlot",
    "days_in_range",
]
