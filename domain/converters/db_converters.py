"""
Converters: Database row format <-> domain models.

Provides bidirectional conversion between Supabase database rows and the
typed session, record and progress models.

Database schema:

workout_sessions:
- id, user_id, routine_id: text/UUID
- status: text (in_progress, completed, aborted)
- start_time, end_time: timestamptz
- duration_seconds: integer
- exercises: JSONB (ordered exercise entries with ordered sets)
- metrics: JSONB (total_volume, total_reps, calories_burned, personal_records)
- notes: text

personal_records (unique on user_id, exercise_id, record_type):
- user_id, exercise_id, record_type, value, achieved_at, session_id
- previous_value, previous_achieved_at: superseded value snapshot

progress_entries:
- id, user_id, category, metric, recorded_at, value, unit, source
- session_id, exercise_id, notes: context columns
"""

from datetime import datetime
from typing import Any, Dict, Optional

from domain.models import (
    ExerciseEntry,
    PersonalRecord,
    PreviousRecord,
    ProgressCategory,
    ProgressContext,
    ProgressEntry,
    ProgressSource,
    RecordType,
    SessionMetrics,
    SessionStatus,
    WorkoutSession,
)


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# =============================================================================
# Sessions
# =============================================================================


def row_to_session(row: Dict[str, Any]) -> WorkoutSession:
    """
    Convert a workout_sessions row to a WorkoutSession.

    Args:
        row: Database row dictionary

    Returns:
        WorkoutSession domain model

    Raises:
        ValueError: If start_time is missing or unparseable
    """
    start_time = _parse_datetime(row.get("start_time"))
    if start_time is None:
        raise ValueError(f"Session {row.get('id')} has no valid start_time")

    metrics = row.get("metrics") or {}

    return WorkoutSession(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        routine_id=row.get("routine_id"),
        status=SessionStatus(row.get("status", SessionStatus.IN_PROGRESS.value)),
        start_time=start_time,
        end_time=_parse_datetime(row.get("end_time")),
        duration_seconds=row.get("duration_seconds"),
        exercises=[
            ExerciseEntry.model_validate(entry)
            for entry in row.get("exercises") or []
        ],
        metrics=SessionMetrics.model_validate(metrics),
        notes=row.get("notes"),
    )


def session_to_row(session: WorkoutSession) -> Dict[str, Any]:
    """Convert a WorkoutSession to a workout_sessions row."""
    return {
        "id": session.id,
        "user_id": session.user_id,
        "routine_id": session.routine_id,
        "status": session.status.value,
        "start_time": _format_datetime(session.start_time),
        "end_time": _format_datetime(session.end_time),
        "duration_seconds": session.duration_seconds,
        "exercises": [entry.model_dump(mode="json") for entry in session.exercises],
        "metrics": session.metrics.model_dump(mode="json"),
        "notes": session.notes,
    }


# =============================================================================
# Personal records
# =============================================================================


def row_to_record(row: Dict[str, Any]) -> PersonalRecord:
    """Convert a personal_records row to a PersonalRecord."""
    previous = None
    previous_value = row.get("previous_value")
    previous_at = _parse_datetime(row.get("previous_achieved_at"))
    if previous_value is not None and previous_at is not None:
        previous = PreviousRecord(value=float(previous_value), achieved_at=previous_at)

    return PersonalRecord(
        user_id=str(row["user_id"]),
        exercise_id=str(row["exercise_id"]),
        record_type=RecordType(row["record_type"]),
        value=float(row["value"]),
        achieved_at=_parse_datetime(row.get("achieved_at")),
        session_id=str(row["session_id"]),
        previous=previous,
    )


def record_to_row(record: PersonalRecord) -> Dict[str, Any]:
    """Convert a PersonalRecord to a personal_records row."""
    return {
        "user_id": record.user_id,
        "exercise_id": record.exercise_id,
        "record_type": record.record_type.value,
        "value": record.value,
        "achieved_at": _format_datetime(record.achieved_at),
        "session_id": record.session_id,
        "previous_value": record.previous.value if record.previous else None,
        "previous_achieved_at": (
            _format_datetime(record.previous.achieved_at) if record.previous else None
        ),
    }


# =============================================================================
# Progress entries
# =============================================================================


def row_to_progress_entry(row: Dict[str, Any]) -> ProgressEntry:
    """Convert a progress_entries row to a ProgressEntry."""
    return ProgressEntry(
        id=str(row["id"]) if row.get("id") is not None else None,
        user_id=str(row["user_id"]),
        category=ProgressCategory(row["category"]),
        metric=row["metric"],
        recorded_at=_parse_datetime(row.get("recorded_at")),
        value=float(row["value"]),
        unit=row.get("unit", ""),
        context=ProgressContext(
            session_id=row.get("session_id"),
            exercise_id=row.get("exercise_id"),
            notes=row.get("notes"),
        ),
        source=ProgressSource(row.get("source", ProgressSource.WORKOUT.value)),
    )


def progress_entry_to_row(entry: ProgressEntry) -> Dict[str, Any]:
    """Convert a ProgressEntry to a progress_entries row."""
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "category": entry.category.value,
        "metric": entry.metric,
        "recorded_at": _format_datetime(entry.recorded_at),
        "value": entry.value,
        "unit": entry.unit,
        "session_id": entry.context.session_id,
        "exercise_id": entry.context.exercise_id,
        "notes": entry.context.notes,
        "source": entry.source.value,
    }
