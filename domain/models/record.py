"""
Personal record ledger entry.

There is at most one current record per (user, exercise, record type). A
record remembers the single value it superseded; older history is not kept.
"""

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.session import as_utc


class RecordType(str, Enum):
    """Kind of personal record."""

    WEIGHT = "weight"
    VOLUME = "volume"
    REPS = "reps"
    DURATION = "duration"


class RecordKey(NamedTuple):
    """Unique key of the current-record slot."""

    user_id: str
    exercise_id: str
    record_type: RecordType


class PreviousRecord(BaseModel):
    """Snapshot of the value a record replaced."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: float
    achieved_at: datetime

    @field_validator("achieved_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class PersonalRecord(BaseModel):
    """
    Current best value for a (user, exercise, record type).

    Examples:
        >>> record = PersonalRecord(
        ...     user_id="user-1",
        ...     exercise_id="bench-press",
        ...     record_type=RecordType.WEIGHT,
        ...     value=100.0,
        ...     achieved_at=datetime(2024, 1, 1),
        ...     session_id="s-1",
        ... )
        >>> record.key
        RecordKey(user_id='user-1', exercise_id='bench-press', record_type=<RecordType.WEIGHT: 'weight'>)
    """

    model_config = ConfigDict(extra="forbid")

    user_id: str
    exercise_id: str
    record_type: RecordType
    value: float
    achieved_at: datetime
    session_id: str = Field(..., description="Session that set the record")
    previous: Optional[PreviousRecord] = None

    @field_validator("achieved_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @property
    def key(self) -> RecordKey:
        return RecordKey(self.user_id, self.exercise_id, self.record_type)

    @property
    def superseded_value(self) -> Optional[float]:
        """Stored value this record replaces; None when the slot was empty."""
        return self.previous.value if self.previous else None

    def superseding(self, current: Optional["PersonalRecord"]) -> "PersonalRecord":
        """
        Return this record with its previous pointer derived from ``current``.

        When ``current`` was written by the same session, it is an
        intermediate in-session value, so its own previous pointer (the
        value from before the session) is carried forward instead.

        Args:
            current: The record currently occupying the slot, if any

        Returns:
            New PersonalRecord ready to become the current slot
        """
        if current is None:
            previous = None
        elif current.session_id == self.session_id:
            previous = current.previous
        else:
            previous = PreviousRecord(
                value=current.value, achieved_at=current.achieved_at
            )
        return self.model_copy(update={"previous": previous})
