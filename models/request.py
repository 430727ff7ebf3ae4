"""Availability query and result models."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from models.slot import AvailableBlock
from utils.constants import MAX_MIN_DURATION_MINUTES


class BlockPolicy(str, Enum):
    """How a long open run is turned into blocks."""

    MAXIMAL_RUN = "maximal_run"  # one block per contiguous run
    FIRST_FIT = "first_fit"  # chunk a run each time the minimum is reached


class AvailabilityRequest(BaseModel):
    """Parameters for an availability query."""

    category: str
    subcategory: str
    start: datetime
    end: datetime
    min_duration: Optional[int] = Field(
        default=None, ge=1, le=MAX_MIN_DURATION_MINUTES, description="Minutes"
    )
    group_by_day: bool = False
    not_before: Optional[datetime] = None
    policy: BlockPolicy = BlockPolicy.MAXIMAL_RUN

    class Config:
        json_schema_extra = {
            "example": {
                "category": "friends",
                "subcategory": "lunch",
                "start": "2024-01-16T00:00:00",
                "end": "2024-01-16T23:59:59",
                "min_duration": 60,
                "group_by_day": True,
            }
        }

    @model_validator(mode="after")
    def _check_range(self) -> "AvailabilityRequest":
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


class AvailabilityResult(BaseModel):
    """Outcome of an availability query."""

    category: str
    subcategory: str
    start: datetime
    end: datetime
    blocks: List[AvailableBlock] = Field(default_factory=list)
    by_day: Optional[Dict[str, List[AvailableBlock]]] = None
    total_events: int = 0
    constraint_found: bool = True
