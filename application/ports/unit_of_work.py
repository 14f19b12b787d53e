"""
Unit of Work Interface (Port).

A unit of work is the explicit transaction boundary for session completion.
It is passed by value to every SessionStore, RecordLedger and MetricsJournal
call so the boundary is visible at each call site.

Writes made through a unit of work are staged in its StagedChanges and only
become visible to other readers when commit() succeeds. Reads made through
the same unit of work see its own staged writes first.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from domain.models import (
    PersonalRecord,
    ProgressEntry,
    RecordKey,
    SessionStatus,
    WorkoutSession,
)


@dataclass
class StagedSessionWrite:
    """A session write that only applies if the stored status still matches."""
    session: WorkoutSession
    expected_status: SessionStatus


@dataclass
class StagedChanges:
    """Writes accumulated by a unit of work, applied together on commit."""
    sessions: Dict[str, StagedSessionWrite] = field(default_factory=dict)
    records: Dict[RecordKey, PersonalRecord] = field(default_factory=dict)
    progress_entries: List[ProgressEntry] = field(default_factory=list)

    def stage_session(
        self,
        session: WorkoutSession,
        expected_status: SessionStatus,
    ) -> None:
        self.sessions[session.id] = StagedSessionWrite(session, expected_status)

    def stage_record(self, record: PersonalRecord) -> None:
        # One slot per key: a later write in the same unit of work replaces it
        self.records[record.key] = record

    def stage_progress_entry(self, entry: ProgressEntry) -> None:
        self.progress_entries.append(entry)

    def staged_session(self, session_id: str) -> Optional[WorkoutSession]:
        staged = self.sessions.get(session_id)
        return staged.session if staged else None

    def staged_record(self, key: RecordKey) -> Optional[PersonalRecord]:
        return self.records.get(key)

    @property
    def is_empty(self) -> bool:
        return not (self.sessions or self.records or self.progress_entries)

    def clear(self) -> None:
        self.sessions.clear()
        self.records.clear()
        self.progress_entries.clear()


class UnitOfWork(Protocol):
    """
    Abstract interface for an atomic unit of work.

    Usage:
        with uow_factory.begin(timeout_seconds=10) as uow:
            session = session_store.get(session_id, uow=uow)
            ...
            session_store.update_conditionally(uow, session, expected_status=...)
            uow.commit()

    Leaving the ``with`` block without a successful commit rolls back.
    """

    @property
    def changes(self) -> StagedChanges:
        """Staged writes of this unit of work."""
        ...

    @property
    def is_active(self) -> bool:
        """True until the unit of work is committed or rolled back."""
        ...

    def commit(self) -> None:
        """
        Apply all staged writes atomically.

        Raises:
            ConditionalWriteError: A staged session no longer has its expected
                status; nothing was applied.
            TransactionTimeoutError: The deadline passed before commit.
            TransientStoreError: Retryable store failure; nothing was applied.
        """
        ...

    def rollback(self) -> None:
        """Discard all staged writes."""
        ...

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...


class UnitOfWorkFactory(Protocol):
    """Creates units of work against one backing store."""

    def begin(self, *, timeout_seconds: Optional[float] = None) -> UnitOfWork:
        """
        Open a new unit of work.

        Args:
            timeout_seconds: Deadline for commit, measured from now.
                None means no deadline.

        Returns:
            An active UnitOfWork
        """
        ...
