"""
Progress time-series entries.

Entries are append-only facts: a metric value for a user at a point in time,
with the context it came from.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.session import as_utc


class ProgressCategory(str, Enum):
    EXERCISE = "exercise"
    PERFORMANCE = "performance"
    BODY = "body"


class ProgressSource(str, Enum):
    """Where a progress value was produced."""

    MANUAL = "manual"
    WORKOUT = "workout"
    WEARABLE = "wearable"
    IMPORT = "import"


class ProgressContext(BaseModel):
    model_config = ConfigDict(extra="forbid")

    session_id: Optional[str] = None
    exercise_id: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class ProgressEntry(BaseModel):
    """A single point in a user's progress time series."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = Field(
        default=None, description="Assigned when appended to the journal"
    )
    user_id: str
    category: ProgressCategory
    metric: str = Field(..., min_length=1, max_length=200)
    recorded_at: datetime
    value: float
    unit: str
    context: ProgressContext = Field(default_factory=ProgressContext)
    source: ProgressSource = ProgressSource.WORKOUT

    @field_validator("recorded_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
