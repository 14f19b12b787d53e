"""
Domain layer for the workout session API.

This package contains pure domain models and services that are independent
of infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExerciseEntry,
    PersonalRecord,
    ProgressEntry,
    RecordType,
    SessionMetrics,
    SessionStatus,
    WorkoutSession,
    WorkoutSet,
)

__all__ = [
    "ExerciseEntry",
    "PersonalRecord",
    "ProgressEntry",
    "RecordType",
    "SessionMetrics",
    "SessionStatus",
    "WorkoutSession",
    "WorkoutSet",
]
