"""
Unit tests for the session, record and progress domain models.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from domain.models import (
    InvalidStatusTransition,
    PreviousRecord,
    ProgressCategory,
    ProgressEntry,
    RecordKey,
    RecordType,
    SessionMetrics,
    SessionStatus,
    WorkoutSet,
)
from tests.fakes import SESSION_END, SESSION_START, make_record, make_session, make_set


@pytest.mark.unit
class TestWorkoutSession:

    def test_defaults_to_in_progress(self):
        session = make_session()

        assert session.status is SessionStatus.IN_PROGRESS
        assert session.end_time is None
        assert session.metrics == SessionMetrics()

    def test_completed_volume_skips_incomplete_sets(self):
        session = make_session(
            sets=[make_set(80, 10), make_set(85, 8), make_set(100, 5, completed=False)]
        )

        assert session.completed_volume == 1480.0
        assert session.completed_reps == 18

    def test_complete_sets_end_time_and_duration(self):
        session = make_session()

        completed = session.complete(
            end_time=SESSION_END,
            exercises=session.exercises,
            metrics=SessionMetrics(total_volume=800, total_reps=10),
        )

        assert completed.status is SessionStatus.COMPLETED
        assert completed.end_time == SESSION_END
        assert completed.duration_seconds == 45 * 60
        assert session.status is SessionStatus.IN_PROGRESS

    def test_duration_floors_to_whole_seconds(self):
        session = make_session()

        completed = session.complete(
            end_time=SESSION_START + timedelta(seconds=90, milliseconds=999),
            exercises=session.exercises,
            metrics=SessionMetrics(),
        )

        assert completed.duration_seconds == 90

    def test_duration_never_negative(self):
        session = make_session()

        aborted = session.abort(end_time=SESSION_START - timedelta(minutes=1))

        assert aborted.duration_seconds == 0

    @pytest.mark.parametrize("status", [SessionStatus.COMPLETED, SessionStatus.ABORTED])
    def test_terminal_session_cannot_transition(self, status):
        session = make_session(status=status)

        with pytest.raises(InvalidStatusTransition):
            session.complete(end_time=SESSION_END, exercises=[], metrics=SessionMetrics())
        with pytest.raises(InvalidStatusTransition):
            session.abort(end_time=SESSION_END)

    def test_naive_start_time_is_treated_as_utc(self):
        session = make_session(start_time=datetime(2024, 1, 1, 10, 0))

        assert session.start_time == SESSION_START
        assert session.start_time.tzinfo is timezone.utc

    def test_naive_start_time_completes_against_aware_clock(self):
        session = make_session(start_time=datetime(2024, 1, 1, 10, 0))

        completed = session.complete(
            end_time=SESSION_END, exercises=session.exercises, metrics=SessionMetrics()
        )

        assert completed.duration_seconds == 45 * 60

    def test_naive_end_time_is_treated_as_utc(self):
        session = make_session()

        aborted = session.abort(end_time=datetime(2024, 1, 1, 10, 45))

        assert aborted.end_time == SESSION_END
        assert aborted.duration_seconds == 45 * 60

    def test_unknown_set_fields_rejected(self):
        with pytest.raises(ValidationError):
            WorkoutSet(weight=50, reps=5, tempo="3-1-1")


@pytest.mark.unit
class TestPersonalRecord:

    def test_naive_achieved_at_is_treated_as_utc(self):
        record = make_record(100, achieved_at=datetime(2024, 1, 1, 10, 45))

        assert record.achieved_at == SESSION_END

    def test_key(self):
        record = make_record(100)

        assert record.key == RecordKey("user-1", "bench-press", RecordType.WEIGHT)

    def test_superseding_nothing_has_no_previous(self):
        new = make_record(110, session_id="s-2")

        assert new.superseding(None).previous is None

    def test_superseding_other_session_snapshots_current(self):
        current = make_record(100)
        new = make_record(110, session_id="s-2", achieved_at=SESSION_END)

        superseded = new.superseding(current)

        assert superseded.previous == PreviousRecord(
            value=100, achieved_at=current.achieved_at
        )

    def test_superseding_same_session_keeps_pre_session_value(self):
        """An intermediate in-session record does not become the previous value."""
        before = make_record(100)
        first = make_record(110, session_id="s-2", achieved_at=SESSION_END).superseding(before)
        second = make_record(120, session_id="s-2", achieved_at=SESSION_END)

        superseded = second.superseding(first)

        assert superseded.value == 120
        assert superseded.previous.value == 100


@pytest.mark.unit
class TestProgressEntry:

    def test_empty_metric_rejected(self):
        with pytest.raises(ValidationError):
            ProgressEntry(
                user_id="user-1",
                category=ProgressCategory.BODY,
                metric="",
                recorded_at=SESSION_END,
                value=80,
                unit="kg",
            )

    def test_context_defaults_empty(self):
        entry = ProgressEntry(
            user_id="user-1",
            category=ProgressCategory.BODY,
            metric="body_weight",
            recorded_at=SESSION_END,
            value=80,
            unit="kg",
        )

        assert entry.context.session_id is None
        assert entry.id is None
