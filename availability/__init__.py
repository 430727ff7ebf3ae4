"""Booking availability engine."""

from .constraints import (
    AVAILABILITY_CONSTRAINTS,
    describe_categories,
    find_constraint,
    list_constraints,
)
from .engine import (
    get_all_availability,
    get_availability,
    get_availability_by_day,
    get_available_blocks,
    query_availability,
)
from .filters import filter_by_duration, group_by_day, split_at_midnight
from .generator import generate_slots

__all__ = [
    "AVAILABILITY_CONSTRAINTS",
    "describe_categories",
    "filter_by_duration",
    "find_constraint",
    "generate_slots",
    "get_all_availability",
    "get_availability",
    "get_availability_by_day",
    "get_available_blocks",
    "group_by_day",
    "list_constraints",
    "query_availability",
    "split_at_midnight",
]
