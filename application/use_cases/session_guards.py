"""
Shared steps of the session lifecycle use cases.

Ownership checks on a plain load, and the post-commit side effects that must
never undo a committed unit of work. Use cases hand those side effects to a
PostCommitScheduler so the HTTP layer can run them after the response.
"""

import logging
from typing import Any, Callable, Dict, Optional

from application.exceptions import (
    SessionAlreadyCompletedError,
    SessionForbiddenError,
    SessionNotFoundError,
)
from application.ports import AuditLogger, CacheInvalidator, SessionStore
from domain.models import WorkoutSession

logger = logging.getLogger(__name__)

# Runs func(*args, **kwargs), now or later (e.g. BackgroundTasks.add_task)
PostCommitScheduler = Callable[..., Any]


def run_now(func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    """Default scheduler: run the post-commit step inline."""
    func(*args, **kwargs)


def load_owned_session(
    session_store: SessionStore,
    session_id: str,
    user_id: str,
) -> WorkoutSession:
    """
    Load a session and check that ``user_id`` owns it.

    Raises:
        SessionNotFoundError: No session with that ID
        SessionForbiddenError: The session belongs to another user
    """
    session = session_store.get(session_id)
    if session is None:
        raise SessionNotFoundError(f"Session {session_id} not found")
    if session.user_id != user_id:
        raise SessionForbiddenError(
            f"Session {session_id} does not belong to the requesting user"
        )
    return session


def load_open_session(
    session_store: SessionStore,
    session_id: str,
    user_id: str,
) -> WorkoutSession:
    """
    Load an owned session that is still in progress.

    Raises:
        SessionNotFoundError, SessionForbiddenError: See load_owned_session
        SessionAlreadyCompletedError: The session is completed or aborted
    """
    session = load_owned_session(session_store, session_id, user_id)
    if session.status.is_terminal:
        raise SessionAlreadyCompletedError(
            f"Session {session_id} is already {session.status.value}"
        )
    return session


def notify_after_commit(
    event: str,
    session: WorkoutSession,
    *,
    cache_invalidator: Optional[CacheInvalidator] = None,
    audit_logger: Optional[AuditLogger] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Run post-commit side effects. Failures are logged and swallowed."""
    if cache_invalidator is not None:
        try:
            cache_invalidator.invalidate_user_views(session.user_id, session.id)
        except Exception as e:
            logger.warning(
                f"Cache invalidation failed after {event} for session {session.id}: {e}"
            )

    if audit_logger is not None:
        try:
            audit_logger.record(event, session.user_id, session.id, details)
        except Exception as e:
            logger.warning(
                f"Audit logging failed after {event} for session {session.id}: {e}"
            )
