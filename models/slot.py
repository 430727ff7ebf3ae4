"""Slot models: busy calendar intervals, candidate slots and available blocks."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, model_validator

from utils.datetime_utils import elapsed, to_utc


class BusyInterval(BaseModel):
    """An occupied period taken from an external calendar."""

    start: datetime
    end: datetime
    busy: bool = True  # False for transparent / "free" events
    summary: Optional[str] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "start": "2024-01-16T12:00:00-08:00",
                "end": "2024-01-16T12:30:00-08:00",
                "busy": True,
                "summary": "Dentist",
            }
        }

    @model_validator(mode="after")
    def _check_order(self) -> "BusyInterval":
        if to_utc(self.end) < to_utc(self.start):
            raise ValueError("end must not be before start")
        return self

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open overlap test; touching boundaries do not overlap."""
        return to_utc(start) < to_utc(self.end) and to_utc(end) > to_utc(self.start)


class CandidateSlot(BaseModel):
    """Fixed-width slot generated inside an opening window."""

    start: datetime
    end: datetime
    available: bool = True
    reason: Optional[str] = None

    class Config:
        frozen = True


class AvailableBlock(BaseModel):
    """Contiguous span of available slots."""

    start: datetime
    end: datetime

    class Config:
        frozen = True

    @property
    def duration_minutes(self) -> int:
        return int(elapsed(self.start, self.end).total_seconds() // 60)
