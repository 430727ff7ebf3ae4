"""
Constraint table: opening hours per (category, subcategory).

Hours are wall-clock times in the configured local zone. Day indexes run
0=Sunday..6=Saturday. A weekend window of (0, 0) applies to Sunday only;
Saturday then falls outside both ranges and has no availability.
"""

from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from models.constraint import AvailabilityConstraint, BookingCategory, BookingSubcategory
from utils.constants import FRIDAY, MONDAY, SATURDAY, SUNDAY
from utils.exceptions import InvalidConstraintError

Token = Union[str, BookingCategory, BookingSubcategory]

ALL_WEEK = (SUNDAY, SATURDAY)
WORK_WEEK = (MONDAY, FRIDAY)
SUNDAY_ONLY = (SUNDAY, SUNDAY)


def _constraint(
    category: BookingCategory,
    subcategory: BookingSubcategory,
    days: Tuple[int, int],
    hours: Tuple[str, str],
    weekend_days: Optional[Tuple[int, int]] = None,
    weekend_hours: Optional[Tuple[str, str]] = None,
) -> AvailabilityConstraint:
    weekend_days = weekend_days or (None, None)
    weekend_hours = weekend_hours or (None, None)
    try:
        return AvailabilityConstraint(
            category=category,
            subcategory=subcategory,
            weekday_start=days[0],
            weekday_end=days[1],
            start_time=hours[0],
            end_time=hours[1],
            weekend_start=weekend_days[0],
            weekend_end=weekend_days[1],
            weekend_start_time=weekend_hours[0],
            weekend_end_time=weekend_hours[1],
        )
    except PydanticValidationError as e:
        raise InvalidConstraintError(
            f"Invalid constraint {category.value}:{subcategory.value}: {e}"
        ) from e


_P = BookingCategory.PROFESSIONAL
_F = BookingCategory.FRIENDS
_K = BookingCategory.KID_ACTIVITIES
_S = BookingSubcategory

AVAILABILITY_CONSTRAINTS: Tuple[AvailabilityConstraint, ...] = (
    # Professional meetings: business hours only
    _constraint(_P, _S.JOB_INTERVIEW, WORK_WEEK, ("10:00", "15:30")),
    _constraint(_P, _S.NETWORKING, WORK_WEEK, ("10:00", "15:30")),
    _constraint(_P, _S.CONSULTATION, WORK_WEEK, ("10:00", "15:30")),
    _constraint(_P, _S.COLLABORATION, WORK_WEEK, ("10:00", "15:30")),
    # Friends
    _constraint(
        _F, _S.COFFEE, WORK_WEEK, ("07:00", "14:00"), SUNDAY_ONLY, ("07:00", "14:00")
    ),
    _constraint(
        _F, _S.LUNCH, WORK_WEEK, ("11:00", "14:00"), SUNDAY_ONLY, ("11:00", "13:00")
    ),
    _constraint(_F, _S.DINNER, ALL_WEEK, ("18:00", "23:59")),
    _constraint(
        _F, _S.BRUNCH, WORK_WEEK, ("09:30", "14:00"), SUNDAY_ONLY, ("09:30", "13:00")
    ),
    # Kid activities
    _constraint(_K, _S.OUTINGS, ALL_WEEK, ("07:00", "23:59")),
    _constraint(_K, _S.TRIPS_MULTI_DAY, ALL_WEEK, ("00:00", "23:59")),
)


def _token(value: Token) -> str:
    if isinstance(value, (BookingCategory, BookingSubcategory)):
        return value.value
    return str(value).strip().lower().replace("-", "_")


_INDEX: Dict[Tuple[str, str], AvailabilityConstraint] = {
    (c.category, c.subcategory): c for c in AVAILABILITY_CONSTRAINTS
}


def find_constraint(
    category: Token, subcategory: Token
) -> Optional[AvailabilityConstraint]:
    """Look up the constraint for a category pair; None when unknown."""
    return _INDEX.get((_token(category), _token(subcategory)))


def list_constraints(category: Optional[Token] = None) -> List[AvailabilityConstraint]:
    """All constraints, optionally restricted to one category."""
    if category is None:
        return list(AVAILABILITY_CONSTRAINTS)
    wanted = _token(category)
    return [c for c in AVAILABILITY_CONSTRAINTS if c.category == wanted]


def describe_constraint(constraint: AvailabilityConstraint) -> Dict:
    """Window description used by the category listing."""
    return {
        "name": constraint.subcategory,
        "weekday": {
            "startDay": constraint.weekday_start,
            "endDay": constraint.weekday_end,
            "startTime": constraint.start_time,
            "endTime": constraint.end_time,
        },
        "weekend": (
            {
                "startDay": constraint.weekend_start,
                "endDay": constraint.weekend_end,
                "startTime": constraint.weekend_start_time,
                "endTime": constraint.weekend_end_time,
            }
            if constraint.has_weekend_window
            else None
        ),
    }


def describe_categories() -> List[Dict]:
    """Every category with its subcategories' opening windows."""
    return [
        {
            "category": category.value,
            "subcategories": [describe_constraint(c) for c in list_constraints(category)],
        }
        for category in BookingCategory
    ]
