"""
Session Store Interface (Port).

This module defines the abstract interface for workout session persistence.
Sessions are created in_progress by an external "start workout" operation;
this store only loads them and applies status-conditional updates.
"""
from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from application.ports.unit_of_work import UnitOfWork
from domain.models import SessionStatus, WorkoutSession


class SessionStore(Protocol):
    """
    Abstract interface for workout session persistence.
    """

    def get(
        self,
        session_id: str,
        *,
        uow: Optional[UnitOfWork] = None,
    ) -> Optional[WorkoutSession]:
        """
        Load a session by ID.

        Args:
            session_id: Session ID
            uow: Unit of work to read through. When given, a session staged
                in that unit of work is returned instead of the stored one.

        Returns:
            WorkoutSession or None if not found
        """
        ...

    def update_conditionally(
        self,
        uow: UnitOfWork,
        session: WorkoutSession,
        *,
        expected_status: SessionStatus,
    ) -> WorkoutSession:
        """
        Stage a session update that only applies if the stored status matches.

        The status is checked when staging and again atomically at commit.

        Args:
            uow: Unit of work the write is enlisted in
            session: New session state
            expected_status: Status the stored session must still have

        Returns:
            The staged session

        Raises:
            ConditionalWriteError: If the session is missing or its status
                differs from expected_status
        """
        ...

    def list_for_user(
        self,
        user_id: str,
        *,
        status: Optional[SessionStatus] = None,
        since: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[WorkoutSession], int]:
        """
        List a user's sessions, newest start_time first.

        Args:
            user_id: User ID
            status: Only sessions with this status
            since: Only sessions started at or after this time
            limit: Maximum sessions to return
            offset: Sessions to skip for pagination

        Returns:
            Tuple of (sessions page, total matching count)
        """
        ...
