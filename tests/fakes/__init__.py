"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Stores share one FakeDatabase, so a unit of work commits atomically
- Failure injection for store errors, commit failures and races
- Builders for sessions and a factory wiring the whole completion stack

Usage:
    from tests.fakes import create_completion_stack, make_session, make_set

    stack = create_completion_stack()
    stack.db.seed_session(make_session(sets=[make_set(80, 10)]))
    result = stack.coordinator().complete("session-1", "user-1")
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from application.use_cases import (
    AbortSessionUseCase,
    CompletionCoordinator,
    SessionQueryService,
)
from domain.models import (
    ExerciseEntry,
    PersonalRecord,
    RecordType,
    SessionStatus,
    WorkoutSession,
    WorkoutSet,
)
from tests.fakes.collaborators import (
    FakeAuditLogger,
    FakeCacheInvalidator,
    FakeProfileRepository,
)
from tests.fakes.database import (
    FakeDatabase,
    FakeUnitOfWork,
    FakeUnitOfWorkFactory,
    TickingClock,
)
from tests.fakes.metrics_journal import FakeMetricsJournal
from tests.fakes.record_ledger import FakeRecordLedger
from tests.fakes.session_store import FakeSessionStore

SESSION_START = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
SESSION_END = SESSION_START + timedelta(minutes=45)


def fixed_clock() -> datetime:
    """Wall clock pinned to SESSION_END."""
    return SESSION_END


# =============================================================================
# Builders
# =============================================================================


def make_set(weight: float, reps: int, *, completed: bool = True, **kwargs) -> WorkoutSet:
    return WorkoutSet(weight=weight, reps=reps, completed=completed, **kwargs)


def make_entry(exercise_id: str, sets: List[WorkoutSet], **kwargs) -> ExerciseEntry:
    return ExerciseEntry(exercise_id=exercise_id, sets=sets, **kwargs)


def make_session(
    *,
    session_id: str = "session-1",
    user_id: str = "user-1",
    exercise_id: str = "bench-press",
    sets: Optional[List[WorkoutSet]] = None,
    exercises: Optional[List[ExerciseEntry]] = None,
    status: SessionStatus = SessionStatus.IN_PROGRESS,
    start_time: datetime = SESSION_START,
) -> WorkoutSession:
    """
    Build an in-progress session.

    Pass ``exercises`` for multi-exercise sessions; otherwise ``sets`` are
    logged against a single ``exercise_id``.
    """
    if exercises is None:
        exercises = [make_entry(exercise_id, sets if sets is not None else [make_set(80, 10)])]
    return WorkoutSession(
        id=session_id,
        user_id=user_id,
        routine_id="routine-1",
        status=status,
        start_time=start_time,
        exercises=exercises,
    )


def make_record(
    value: float,
    *,
    record_type: RecordType = RecordType.WEIGHT,
    user_id: str = "user-1",
    exercise_id: str = "bench-press",
    session_id: str = "old-session",
    achieved_at: datetime = SESSION_START - timedelta(days=7),
) -> PersonalRecord:
    return PersonalRecord(
        user_id=user_id,
        exercise_id=exercise_id,
        record_type=record_type,
        value=value,
        achieved_at=achieved_at,
        session_id=session_id,
    )


# =============================================================================
# Factory Functions
# =============================================================================


@dataclass
class CompletionStack:
    """Fakes for every port, wired to one FakeDatabase."""

    db: FakeDatabase
    session_store: FakeSessionStore
    record_ledger: FakeRecordLedger
    metrics_journal: FakeMetricsJournal
    uow_factory: FakeUnitOfWorkFactory
    profile_repo: FakeProfileRepository
    cache_invalidator: FakeCacheInvalidator
    audit_logger: FakeAuditLogger
    clock: Callable[[], datetime] = fixed_clock

    def coordinator(self, **kwargs) -> CompletionCoordinator:
        options = {
            "cache_invalidator": self.cache_invalidator,
            "audit_logger": self.audit_logger,
            "clock": self.clock,
        }
        options.update(kwargs)
        return CompletionCoordinator(
            session_store=self.session_store,
            record_ledger=self.record_ledger,
            metrics_journal=self.metrics_journal,
            uow_factory=self.uow_factory,
            profile_repo=self.profile_repo,
            **options,
        )

    def abort_use_case(self, **kwargs) -> AbortSessionUseCase:
        options = {
            "cache_invalidator": self.cache_invalidator,
            "audit_logger": self.audit_logger,
            "clock": self.clock,
        }
        options.update(kwargs)
        return AbortSessionUseCase(
            session_store=self.session_store,
            uow_factory=self.uow_factory,
            **options,
        )

    def query_service(self, **kwargs) -> SessionQueryService:
        kwargs.setdefault("clock", self.clock)
        return SessionQueryService(session_store=self.session_store, **kwargs)


def create_completion_stack(
    *,
    monotonic: Optional[Callable[[], float]] = None,
) -> CompletionStack:
    """
    Create fakes for the whole completion engine sharing one database.

    Args:
        monotonic: Clock used for unit of work deadlines

    Returns:
        CompletionStack with empty tables
    """
    db = FakeDatabase()
    factory_kwargs = {"monotonic": monotonic} if monotonic is not None else {}
    return CompletionStack(
        db=db,
        session_store=FakeSessionStore(db),
        record_ledger=FakeRecordLedger(db),
        metrics_journal=FakeMetricsJournal(db),
        uow_factory=FakeUnitOfWorkFactory(db, **factory_kwargs),
        profile_repo=FakeProfileRepository(),
        cache_invalidator=FakeCacheInvalidator(),
        audit_logger=FakeAuditLogger(),
    )


__all__ = [
    # Fakes
    "FakeDatabase",
    "FakeUnitOfWork",
    "FakeUnitOfWorkFactory",
    "TickingClock",
    "FakeSessionStore",
    "FakeRecordLedger",
    "FakeMetricsJournal",
    "FakeProfileRepository",
    "FakeCacheInvalidator",
    "FakeAuditLogger",
    # Builders
    "SESSION_START",
    "SESSION_END",
    "fixed_clock",
    "make_set",
    "make_entry",
    "make_session",
    "make_record",
    # Factories
    "CompletionStack",
    "create_completion_stack",
]
