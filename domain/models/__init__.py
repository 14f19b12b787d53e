"""
Domain models for the workout session API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services):
- WorkoutSession: aggregate root holding exercise entries and their sets
- PersonalRecord: current best value per (user, exercise, record type)
- ProgressEntry: append-only progress time-series point

Usage:
    >>> from domain.models import WorkoutSession, ExerciseEntry, WorkoutSet

    >>> session = WorkoutSession.model_validate_json(json_str)
    >>> session.completed_volume
    2020.0
"""

from domain.models.progress import (
    ProgressCategory,
    ProgressContext,
    ProgressEntry,
    ProgressSource,
)
from domain.models.record import (
    PersonalRecord,
    PreviousRecord,
    RecordKey,
    RecordType,
)
from domain.models.session import (
    ExerciseEntry,
    InvalidStatusTransition,
    SessionMetrics,
    SessionStatus,
    WorkoutSession,
    WorkoutSet,
)

__all__ = [
    # Sessions
    "WorkoutSession",
    "ExerciseEntry",
    "WorkoutSet",
    "SessionMetrics",
    "SessionStatus",
    "InvalidStatusTransition",
    # Records
    "PersonalRecord",
    "PreviousRecord",
    "RecordKey",
    "RecordType",
    # Progress
    "ProgressEntry",
    "ProgressContext",
    "ProgressCategory",
    "ProgressSource",
]
