"""
AbortSession Use Case.

Moves an in-progress session to aborted. No records or progress entries are
written for an aborted session.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from application.exceptions import (
    ConcurrentCompletionError,
    ConditionalWriteError,
    InternalCompletionError,
    SessionNotFoundError,
    TransactionAbortedError,
    TransientStoreError,
    WorkoutSessionError,
)
from application.ports import (
    AuditLogger,
    CacheInvalidator,
    SessionStore,
    UnitOfWorkFactory,
)
from application.use_cases.session_guards import (
    PostCommitScheduler,
    load_open_session,
    notify_after_commit,
    run_now,
)
from domain.models import SessionStatus, WorkoutSession

logger = logging.getLogger(__name__)

SESSION_ABORTED_EVENT = "session.aborted"


@dataclass
class AbortSessionResult:
    """Result of the AbortSession use case execution."""

    success: bool
    session: Optional[WorkoutSession] = None
    error: Optional[WorkoutSessionError] = None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code if self.error else None


class AbortSessionUseCase:
    """
    Use case for abandoning a workout session.

    Same ownership checks and status guard as completion; a session that was
    completed concurrently cannot be aborted.
    """

    def __init__(
        self,
        session_store: SessionStore,
        uow_factory: UnitOfWorkFactory,
        *,
        cache_invalidator: Optional[CacheInvalidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        timeout_seconds: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
        schedule: Optional[PostCommitScheduler] = None,
    ) -> None:
        self._session_store = session_store
        self._uow_factory = uow_factory
        self._cache_invalidator = cache_invalidator
        self._audit_logger = audit_logger
        self._timeout_seconds = timeout_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._schedule = schedule or run_now

    def abort(self, session_id: str, user_id: str) -> AbortSessionResult:
        """
        Abort a session.

        Args:
            session_id: Session to abort
            user_id: Requesting user, must own the session

        Returns:
            AbortSessionResult with the aborted session or the error
        """
        try:
            load_open_session(self._session_store, session_id, user_id)
            aborted = self._abort_in_unit_of_work(session_id)

        except WorkoutSessionError as e:
            logger.warning(
                "Abort of session %s rejected (%s): %s",
                session_id,
                e.error_code,
                e.message,
            )
            return AbortSessionResult(success=False, error=e)

        except Exception as e:
            logger.exception(f"Aborting session {session_id} failed: {e}")
            return AbortSessionResult(
                success=False,
                error=InternalCompletionError("Failed to abort workout session"),
            )

        logger.info(f"Session {aborted.id} aborted after {aborted.duration_seconds}s")
        self._schedule(
            notify_after_commit,
            SESSION_ABORTED_EVENT,
            aborted,
            cache_invalidator=self._cache_invalidator,
            audit_logger=self._audit_logger,
        )
        return AbortSessionResult(success=True, session=aborted)

    def _abort_in_unit_of_work(self, session_id: str) -> WorkoutSession:
        try:
            with self._uow_factory.begin(timeout_seconds=self._timeout_seconds) as uow:
                session = self._session_store.get(session_id, uow=uow)
                if session is None:
                    raise SessionNotFoundError(f"Session {session_id} not found")
                if session.status is not SessionStatus.IN_PROGRESS:
                    raise ConcurrentCompletionError(
                        f"Session {session_id} was {session.status.value} by another request"
                    )

                aborted = session.abort(end_time=self._clock())
                self._session_store.update_conditionally(
                    uow,
                    aborted,
                    expected_status=SessionStatus.IN_PROGRESS,
                )
                uow.commit()

        except ConditionalWriteError as e:
            raise ConcurrentCompletionError(
                f"Session {session_id} was finished by another request"
            ) from e
        except TransientStoreError as e:
            raise TransactionAbortedError(
                f"Abort of session {session_id} failed, safe to retry: {e}"
            ) from e

        return aborted
