"""
Conversion between raw calendar payloads, engine models and JSON.

Calendar providers hand back loosely shaped event dicts; only well-formed
entries become BusyInterval objects. Output timestamps are local wall-clock
strings with no offset.
"""

from datetime import date, datetime, time, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Union

from models.request import AvailabilityResult
from models.slot import AvailableBlock, BusyInterval, CandidateSlot
from utils.datetime_utils import format_local_datetime, local_zone, parse_iso_datetime
from utils.logging_config import setup_logging

logger = setup_logging(name=__name__)

RawEvent = Union[BusyInterval, Dict[str, Any]]


def _parse_timestamp(value: Any, zone: tzinfo) -> datetime:
    # Google style payloads wrap the value: {"dateTime": ...} or {"date": ...}
    if isinstance(value, dict):
        value = value.get("dateTime") or value.get("date")

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=zone)
    if isinstance(value, date):
        return datetime.combine(value, time(0, 0), tzinfo=zone)
    if isinstance(value, str):
        return parse_iso_datetime(value, zone)
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def _is_busy(event: Dict[str, Any]) -> bool:
    if "busy" in event:
        return bool(event["busy"])
    return event.get("transparency") != "transparent"


def parse_busy_interval(event: RawEvent, tz: Optional[tzinfo] = None) -> BusyInterval:
    """
    Build a BusyInterval from a raw event.

    Raises:
        ValueError: If start/end are missing, unparseable or out of order
    """
    if isinstance(event, BusyInterval):
        return event
    if not isinstance(event, dict):
        raise ValueError(f"Event must be a mapping, got {type(event).__name__}")

    zone = local_zone(tz)
    if event.get("start") is None or event.get("end") is None:
        raise ValueError("Event is missing start or end")

    return BusyInterval(
        start=_parse_timestamp(event["start"], zone),
        end=_parse_timestamp(event["end"], zone),
        busy=_is_busy(event),
        summary=event.get("summary"),
    )


def parse_busy_intervals(
    events: Iterable[RawEvent], tz: Optional[tzinfo] = None
) -> List[BusyInterval]:
    """Parse raw events, dropping malformed ones with a warning."""
    intervals: List[BusyInterval] = []
    skipped = 0
    for event in events:
        try:
            intervals.append(parse_busy_interval(event, tz))
        except (TypeError, ValueError) as e:
            skipped += 1
            logger.warning(f"Skipping malformed calendar event: {e}")

    if skipped:
        logger.info(f"Parsed {len(intervals)} calendar events, skipped {skipped}")
    return intervals


def serialize_block(block: AvailableBlock, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    return {
        "start": format_local_datetime(block.start, tz),
        "end": format_local_datetime(block.end, tz),
        "available": True,
        "durationMinutes": block.duration_minutes,
    }


def serialize_slot(slot: CandidateSlot, tz: Optional[tzinfo] = None) -> Dict[str, Any]:
    return {
        "start": format_local_datetime(slot.start, tz),
        "end": format_local_datetime(slot.end, tz),
        "available": slot.available,
        "reason": slot.reason,
    }


def serialize_result(
    result: AvailabilityResult, tz: Optional[tzinfo] = None
) -> Dict[str, Any]:
    """
    JSON body for an availability response.

    The availability field is a list of blocks, or a mapping of day key to
    blocks when the result was grouped.
    """
    if result.by_day is not None:
        availability: Any = {
            day: [serialize_block(b, tz) for b in blocks]
            for day, blocks in result.by_day.items()
        }
    else:
        availability = [serialize_block(b, tz) for b in result.blocks]

    body: Dict[str, Any] = {
        "category": result.category,
        "subcategory": result.subcategory,
        "startDate": format_local_datetime(result.start, tz),
        "endDate": format_local_datetime(result.end, tz),
        "availability": availability,
        "totalEvents": result.total_events,
    }
    if not result.constraint_found:
        body["warning"] = (
            f"No availability constraint for {result.category}/{result.subcategory}"
        )
    return body
