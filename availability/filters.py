"""
Duration filter and day grouper.

Consecutive available slots are consolidated into blocks, kept only when
they reach the requested minimum duration, and optionally bucketed by local
calendar day.
"""

from datetime import timedelta, tzinfo
from typing import Dict, Iterable, Iterator, List, Optional, Union

from models.request import BlockPolicy
from models.slot import AvailableBlock, CandidateSlot
from utils.constants import DAY_KEY_FORMAT
from utils.datetime_utils import elapsed, local_zone, next_midnight, to_local, to_utc


def contiguous_runs(slots: Iterable[CandidateSlot]) -> Iterator[List[CandidateSlot]]:
    """
    Yield maximal runs of available slots.

    A run breaks at an unavailable slot or wherever a slot does not start
    exactly at the previous slot's end.
    """
    run: List[CandidateSlot] = []
    for slot in slots:
        if not slot.available:
            if run:
                yield run
                run = []
            continue
        if run and to_utc(slot.start) != to_utc(run[-1].end):
            yield run
            run = []
        run.append(slot)
    if run:
        yield run


def filter_by_duration(
    slots: Iterable[CandidateSlot],
    min_duration_minutes: int,
    policy: Union[BlockPolicy, str] = BlockPolicy.MAXIMAL_RUN,
) -> List[AvailableBlock]:
    """
    Consolidate available slots into blocks of at least a minimum length.

    With the maximal-run policy each contiguous run becomes one block
    spanning the whole run. With first-fit a run is cut into blocks each
    time the accumulated length reaches the minimum. Either way, time that
    cannot reach the minimum is dropped. Lengths are real elapsed time, so
    a block across a DST jump is measured by the clock, not the wall.

    Args:
        slots: Ordered candidate slots
        min_duration_minutes: Minimum block length in minutes
        policy: BlockPolicy or its string value

    Returns:
        Blocks in chronological order
    """
    policy = BlockPolicy(policy)
    threshold = timedelta(minutes=min_duration_minutes)
    blocks: List[AvailableBlock] = []

    for run in contiguous_runs(slots):
        if policy is BlockPolicy.FIRST_FIT:
            block_start = run[0].start
            for slot in run:
                if elapsed(block_start, slot.end) >= threshold:
                    blocks.append(AvailableBlock(start=block_start, end=slot.end))
                    block_start = slot.end
        elif elapsed(run[0].start, run[-1].end) >= threshold:
            blocks.append(AvailableBlock(start=run[0].start, end=run[-1].end))

    return blocks


def available_slot_blocks(slots: Iterable[CandidateSlot]) -> List[AvailableBlock]:
    """Each available slot as its own block."""
    return [AvailableBlock(start=s.start, end=s.end) for s in slots if s.available]


def split_at_midnight(
    block: AvailableBlock, tz: Optional[tzinfo] = None
) -> List[AvailableBlock]:
    """Cut a block at every local midnight it crosses."""
    zone = local_zone(tz)
    current = to_local(block.start, zone)
    end = to_local(block.end, zone)

    pieces: List[AvailableBlock] = []
    boundary = next_midnight(current)
    while to_utc(boundary) < to_utc(end):
        pieces.append(AvailableBlock(start=current, end=boundary))
        current = boundary
        boundary = next_midnight(current)
    if to_utc(current) < to_utc(end):
        pieces.append(AvailableBlock(start=current, end=end))
    return pieces


def group_by_day(
    blocks: Iterable[AvailableBlock], tz: Optional[tzinfo] = None
) -> Dict[str, List[AvailableBlock]]:
    """
    Bucket blocks by the local date of their start.

    Blocks crossing midnight are split first, so no bucket holds a block
    that ends on a later day. Keys are YYYY-MM-DD in chronological order.
    """
    zone = local_zone(tz)
    pieces = [piece for block in blocks for piece in split_at_midnight(block, zone)]
    pieces.sort(key=lambda b: to_utc(b.start))

    by_day: Dict[str, List[AvailableBlock]] = {}
    for piece in pieces:
        key = to_local(piece.start, zone).strftime(DAY_KEY_FORMAT)
        by_day.setdefault(key, []).append(piece)
    return by_day
