"""
Slot generator.

Walks a date range one local calendar day at a time and emits fixed-width
candidate slots inside the constraint's opening window for that day.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Iterable, List, Optional, Tuple

from models.constraint import AvailabilityConstraint
from models.slot import BusyInterval, CandidateSlot
from utils.datetime_utils import (
    at_time,
    iter_days,
    local_zone,
    shift,
    to_local,
    to_utc,
    weekday_index,
)
from utils.logging_config import setup_logging

logger = setup_logging(name=__name__)

_Blocking = Tuple[datetime, datetime, Optional[str]]


def _slot_minutes(slot_minutes: Optional[int]) -> int:
    if slot_minutes is not None:
        return slot_minutes
    from config import settings

    return settings.slot_duration_minutes


def _blocking_intervals(
    busy_intervals: Iterable[BusyInterval], zone: tzinfo
) -> List[_Blocking]:
    # Transparent events never block a slot. Compared as UTC instants.
    return [
        (to_utc(to_local(b.start, zone)), to_utc(to_local(b.end, zone)), b.summary)
        for b in busy_intervals
        if b.busy
    ]


def _conflict(
    slot_start: datetime, slot_end: datetime, blocking: List[_Blocking]
) -> Optional[_Blocking]:
    for interval in blocking:
        busy_start, busy_end, _ = interval
        if slot_start < busy_end and slot_end > busy_start:
            return interval
    return None


def _reason(hit: Optional[_Blocking]) -> Optional[str]:
    if hit is None:
        return None
    summary = hit[2]
    return f"Booked: {summary}" if summary else "Busy"


def generate_slots(
    constraint: Optional[AvailabilityConstraint],
    range_start: datetime,
    range_end: datetime,
    busy_intervals: Iterable[BusyInterval] = (),
    tz: Optional[tzinfo] = None,
    slot_minutes: Optional[int] = None,
    not_before: Optional[datetime] = None,
) -> List[CandidateSlot]:
    """
    Generate candidate slots for every open day in a range.

    Args:
        constraint: Opening hours to apply; None yields no slots
        range_start: First day of the range (only its local date matters)
        range_end: Last day of the range, inclusive
        busy_intervals: Calendar intervals; only busy ones block slots
        tz: Local zone of the constraint table (defaults to settings)
        slot_minutes: Slot width (defaults to settings)
        not_before: Slots ending at or before this instant are omitted

    Returns:
        Chronologically ordered candidate slots
    """
    if constraint is None:
        return []

    zone = local_zone(tz)
    step = timedelta(minutes=_slot_minutes(slot_minutes))
    blocking = _blocking_intervals(busy_intervals, zone)
    cutoff = to_utc(to_local(not_before, zone)) if not_before is not None else None

    first_day = to_local(range_start, zone).date()
    last_day = to_local(range_end, zone).date()

    slots: List[CandidateSlot] = []
    for day in iter_days(first_day, last_day):
        window = constraint.window_for(weekday_index(day))
        if window is None:
            continue

        opens, closes = window
        slot_start = at_time(day, opens, zone)
        day_close = to_utc(at_time(day, closes, zone))

        # Slots step in real time so a DST jump never yields a skipped or
        # repeated instant. A trailing partial slot is dropped.
        slot_end = shift(slot_start, step, zone)
        while to_utc(slot_end) <= day_close:
            if cutoff is None or to_utc(slot_end) > cutoff:
                hit = _conflict(to_utc(slot_start), to_utc(slot_end), blocking)
                slots.append(
                    CandidateSlot(
                        start=slot_start,
                        end=slot_end,
                        available=hit is None,
                        reason=_reason(hit),
                    )
                )
            slot_start = slot_end
            slot_end = shift(slot_start, step, zone)

    logger.debug(
        f"Generated {len(slots)} slots for {constraint.key} "
        f"from {first_day} to {last_day}"
    )
    return slots
