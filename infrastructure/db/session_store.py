"""
Supabase implementation of SessionStore.

Reads go straight to the workout_sessions table (read committed). Updates are
staged in the unit of work and applied by its commit RPC, which re-checks
the expected status atomically.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from supabase import Client

from application.exceptions import ConditionalWriteError
from application.ports.unit_of_work import UnitOfWork
from domain.converters import row_to_session
from domain.models import SessionStatus, WorkoutSession
from infrastructure.db.errors import store_errors

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "workout_sessions"


class SupabaseSessionStore:
    """
    Supabase implementation of SessionStore protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get(
        self,
        session_id: str,
        *,
        uow: Optional[UnitOfWork] = None,
    ) -> Optional[WorkoutSession]:
        """Load a session, preferring a version staged in ``uow``."""
        if uow is not None:
            staged = uow.changes.staged_session(session_id)
            if staged is not None:
                return staged

        with store_errors(f"load session {session_id}"):
            result = (
                self._client.table(SESSIONS_TABLE)
                .select("*")
                .eq("id", session_id)
                .limit(1)
                .execute()
            )

        if not result.data:
            return None
        return row_to_session(result.data[0])

    def update_conditionally(
        self,
        uow: UnitOfWork,
        session: WorkoutSession,
        *,
        expected_status: SessionStatus,
    ) -> WorkoutSession:
        """Stage a status-guarded session update."""
        current = self.get(session.id, uow=uow)
        if current is None:
            raise ConditionalWriteError(
                f"Session {session.id} not found", session_id=session.id
            )
        if current.status is not expected_status:
            raise ConditionalWriteError(
                f"Session {session.id} is {current.status.value}, expected {expected_status.value}",
                session_id=session.id,
            )

        uow.changes.stage_session(session, expected_status)
        logger.debug(f"Staged update of session {session.id} to {session.status.value}")
        return session

    def list_for_user(
        self,
        user_id: str,
        *,
        status: Optional[SessionStatus] = None,
        since: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[WorkoutSession], int]:
        """List a user's sessions, newest first, with the total count."""
        with store_errors(f"list sessions for user {user_id}"):
            query = (
                self._client.table(SESSIONS_TABLE)
                .select("*", count="exact")
                .eq("user_id", user_id)
            )
            if status is not None:
                query = query.eq("status", status.value)
            if since is not None:
                query = query.gte("start_time", since.isoformat())

            result = (
                query.order("start_time", desc=True)
                .range(offset, offset + limit - 1)
                .execute()
            )

        rows = result.data or []
        total = result.count if result.count is not None else len(rows)
        return [row_to_session(row) for row in rows], total
