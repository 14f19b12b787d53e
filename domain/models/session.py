"""
Workout session aggregate.

A WorkoutSession is one attempt at a routine, from start to completion or
abort. It owns an ordered list of exercise entries, each with an ordered list
of logged sets, plus the aggregate metrics computed on completion.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat a naive datetime as UTC; aware values pass through unchanged."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionStatus(str, Enum):
    """Lifecycle status of a workout session."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.COMPLETED, SessionStatus.ABORTED)


class InvalidStatusTransition(ValueError):
    """Raised when a session is asked to leave a terminal status."""

    def __init__(self, current: SessionStatus, target: SessionStatus):
        super().__init__(
            f"Cannot transition session from {current.value} to {target.value}"
        )
        self.current = current
        self.target = target


class WorkoutSet(BaseModel):
    """
    A single logged set.

    Numeric fields are unconstrained here. Business validation lives in
    domain.services.validation and reports every problem at once.
    """

    model_config = ConfigDict(extra="forbid")

    weight: float = Field(..., description="Load in kilograms")
    reps: int = Field(..., description="Repetitions performed")
    duration_seconds: Optional[int] = Field(
        default=None, description="Time under load for time-based exercises"
    )
    rpe: Optional[float] = Field(
        default=None, description="Rate of perceived exertion (1-10)"
    )
    completed: bool = True
    is_personal_record: bool = False
    notes: Optional[str] = Field(default=None, max_length=1000)

    @property
    def volume(self) -> float:
        """Weight x reps for this set."""
        return self.weight * self.reps


class ExerciseEntry(BaseModel):
    """An exercise performed within a session, with its sets in order."""

    model_config = ConfigDict(extra="forbid")

    exercise_id: str = Field(..., description="Canonical exercise ID")
    exercise_name: Optional[str] = None
    sets: List[WorkoutSet] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @property
    def completed_sets(self) -> List[WorkoutSet]:
        return [s for s in self.sets if s.completed]

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.completed_sets)

    @property
    def total_reps(self) -> int:
        return sum(s.reps for s in self.completed_sets)


class SessionMetrics(BaseModel):
    """Aggregates computed when a session is completed."""

    model_config = ConfigDict(extra="forbid")

    total_volume: float = 0.0
    total_reps: int = 0
    calories_burned: int = 0
    personal_records: int = 0


class WorkoutSession(BaseModel):
    """
    Aggregate root for a workout session.

    Status only moves in_progress -> completed or in_progress -> aborted.
    The transition methods return new instances; a terminal session is never
    modified.

    Examples:
        >>> session = WorkoutSession(
        ...     id="s-1",
        ...     user_id="user-1",
        ...     routine_id="r-1",
        ...     start_time=datetime(2024, 1, 1, 10, 0),
        ...     exercises=[
        ...         ExerciseEntry(
        ...             exercise_id="bench-press",
        ...             sets=[WorkoutSet(weight=80, reps=10)],
        ...         )
        ...     ],
        ... )
        >>> session.status
        <SessionStatus.IN_PROGRESS: 'in_progress'>
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    user_id: str
    routine_id: Optional[str] = None
    status: SessionStatus = SessionStatus.IN_PROGRESS
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: Optional[int] = None
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    metrics: SessionMetrics = Field(default_factory=SessionMetrics)
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("start_time", "end_time")
    @classmethod
    def _assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @property
    def completed_volume(self) -> float:
        """Sum of weight x reps over every completed set."""
        return sum(entry.total_volume for entry in self.exercises)

    @property
    def completed_reps(self) -> int:
        return sum(entry.total_reps for entry in self.exercises)

    def elapsed_seconds(self, end_time: datetime) -> int:
        """Whole seconds from start_time to ``end_time``, never negative."""
        return max(0, int((as_utc(end_time) - self.start_time).total_seconds()))

    def complete(
        self,
        *,
        end_time: datetime,
        exercises: List[ExerciseEntry],
        metrics: SessionMetrics,
    ) -> "WorkoutSession":
        """Return the completed version of this session."""
        if self.status is not SessionStatus.IN_PROGRESS:
            raise InvalidStatusTransition(self.status, SessionStatus.COMPLETED)
        return self.model_copy(
            update={
                "status": SessionStatus.COMPLETED,
                "end_time": as_utc(end_time),
                "duration_seconds": self.elapsed_seconds(end_time),
                "exercises": exercises,
                "metrics": metrics,
            },
            deep=True,
        )

    def abort(self, *, end_time: datetime) -> "WorkoutSession":
        """Return the aborted version of this session."""
        if self.status is not SessionStatus.IN_PROGRESS:
            raise InvalidStatusTransition(self.status, SessionStatus.ABORTED)
        return self.model_copy(
            update={
                "status": SessionStatus.ABORTED,
                "end_time": as_utc(end_time),
                "duration_seconds": self.elapsed_seconds(end_time),
            },
            deep=True,
        )
