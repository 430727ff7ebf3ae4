"""
Availability queries.

Ties constraint lookup, slot generation and duration filtering together.
Everything here is synchronous and free of shared state; busy intervals are
supplied by the caller.
"""

from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence, Union

from availability.constraints import AVAILABILITY_CONSTRAINTS, Token, find_constraint
from availability.filters import available_slot_blocks, filter_by_duration, group_by_day
from availability.generator import generate_slots
from models.request import AvailabilityRequest, AvailabilityResult, BlockPolicy
from models.slot import AvailableBlock, BusyInterval, CandidateSlot
from utils.logging_config import setup_logging

logger = setup_logging(name=__name__)


def get_availability(
    category: Token,
    subcategory: Token,
    start: datetime,
    end: datetime,
    busy_intervals: Iterable[BusyInterval] = (),
    tz: Optional[tzinfo] = None,
    not_before: Optional[datetime] = None,
) -> List[CandidateSlot]:
    """
    Candidate slots for a category pair over a date range.

    An unknown pair is not an error: a warning is logged and no slots
    are returned.
    """
    constraint = find_constraint(category, subcategory)
    if constraint is None:
        logger.warning(f"No availability constraint found for {category}/{subcategory}")
        return []
    return generate_slots(
        constraint, start, end, busy_intervals, tz=tz, not_before=not_before
    )


def to_blocks(
    slots: Sequence[CandidateSlot],
    min_duration: Optional[int] = None,
    policy: Union[BlockPolicy, str] = BlockPolicy.MAXIMAL_RUN,
) -> List[AvailableBlock]:
    """Duration-filtered blocks, or single-slot blocks when no minimum is given."""
    if min_duration:
        return filter_by_duration(slots, min_duration, policy)
    return available_slot_blocks(slots)


def get_available_blocks(
    category: Token,
    subcategory: Token,
    start: datetime,
    end: datetime,
    busy_intervals: Iterable[BusyInterval] = (),
    min_duration: Optional[int] = None,
    policy: Union[BlockPolicy, str] = BlockPolicy.MAXIMAL_RUN,
    tz: Optional[tzinfo] = None,
    not_before: Optional[datetime] = None,
) -> List[AvailableBlock]:
    slots = get_availability(
        category, subcategory, start, end, busy_intervals, tz=tz, not_before=not_before
    )
    return to_blocks(slots, min_duration, policy)


def get_availability_by_day(
    category: Token,
    subcategory: Token,
    start: datetime,
    end: datetime,
    busy_intervals: Iterable[BusyInterval] = (),
    min_duration: Optional[int] = None,
    policy: Union[BlockPolicy, str] = BlockPolicy.MAXIMAL_RUN,
    tz: Optional[tzinfo] = None,
    not_before: Optional[datetime] = None,
) -> Dict[str, List[AvailableBlock]]:
    """Available blocks keyed by local day (YYYY-MM-DD)."""
    blocks = get_available_blocks(
        category,
        subcategory,
        start,
        end,
        busy_intervals,
        min_duration=min_duration,
        policy=policy,
        tz=tz,
        not_before=not_before,
    )
    return group_by_day(blocks, tz)


def get_all_availability(
    start: datetime,
    end: datetime,
    busy_intervals: Iterable[BusyInterval] = (),
    tz: Optional[tzinfo] = None,
) -> Dict[str, List[CandidateSlot]]:
    """Candidate slots for every constraint, keyed "category:subcategory"."""
    busy = list(busy_intervals)
    return {
        constraint.key: generate_slots(constraint, start, end, busy, tz=tz)
        for constraint in AVAILABILITY_CONSTRAINTS
    }


def query_availability(
    request: AvailabilityRequest,
    busy_intervals: Iterable[BusyInterval] = (),
    tz: Optional[tzinfo] = None,
) -> AvailabilityResult:
    """
    Run an availability request end to end.

    Args:
        request: Validated query parameters
        busy_intervals: Pre-validated calendar intervals for the range
        tz: Local zone (defaults to settings)

    Returns:
        Result with flat blocks, plus day buckets when requested
    """
    busy = list(busy_intervals)
    constraint_found = find_constraint(request.category, request.subcategory) is not None

    blocks = get_available_blocks(
        request.category,
        request.subcategory,
        request.start,
        request.end,
        busy,
        min_duration=request.min_duration,
        policy=request.policy,
        tz=tz,
        not_before=request.not_before,
    )

    logger.info(
        f"Availability {request.category}/{request.subcategory}: "
        f"{len(blocks)} blocks from {len(busy)} calendar events"
    )

    return AvailabilityResult(
        category=request.category,
        subcategory=request.subcategory,
        start=request.start,
        end=request.end,
        blocks=blocks,
        by_day=group_by_day(blocks, tz) if request.group_by_day else None,
        total_events=len(busy),
        constraint_found=constraint_found,
    )
