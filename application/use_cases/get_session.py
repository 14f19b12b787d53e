"""
Session query use cases.

Read-only access to a user's sessions and aggregate training stats.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from application.exceptions import WorkoutSessionError
from application.ports import SessionStore
from application.use_cases.session_guards import load_owned_session
from domain.models import SessionStatus, WorkoutSession

# Stats period -> lookback window
STATS_PERIODS = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
}

# Upper bound on sessions scanned for stats
MAX_STATS_SESSIONS = 1000


@dataclass
class GetSessionResult:
    """Result of getting a single session."""
    success: bool
    session: Optional[WorkoutSession] = None
    error: Optional[WorkoutSessionError] = None


@dataclass
class ListSessionsResult:
    """Result of listing sessions."""
    sessions: List[WorkoutSession] = field(default_factory=list)
    total: int = 0
    limit: int = 50
    offset: int = 0


@dataclass
class SessionStats:
    """Aggregates over completed sessions in a period."""
    period: str
    since: datetime
    session_count: int = 0
    total_duration_seconds: int = 0
    total_volume: float = 0.0
    personal_records: int = 0
    average_duration_seconds: float = 0.0


class SessionQueryService:
    """
    Use case for reading sessions.

    Encapsulates single-session lookup with ownership checks, filtered
    listing and period stats.
    """

    def __init__(
        self,
        session_store: SessionStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize with required dependencies.

        Args:
            session_store: Session persistence
            clock: Returns the current time (UTC)
        """
        self._session_store = session_store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def get_session(self, session_id: str, user_id: str) -> GetSessionResult:
        """
        Get a session owned by the user.

        Returns:
            GetSessionResult with the session, or a NOT_FOUND / FORBIDDEN error
        """
        try:
            session = load_owned_session(self._session_store, session_id, user_id)
        except WorkoutSessionError as e:
            return GetSessionResult(success=False, error=e)
        return GetSessionResult(success=True, session=session)

    def list_sessions(
        self,
        user_id: str,
        *,
        status: Optional[SessionStatus] = None,
        since: Optional[datetime] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> ListSessionsResult:
        """List a user's sessions, newest first."""
        sessions, total = self._session_store.list_for_user(
            user_id,
            status=status,
            since=since,
            limit=limit,
            offset=offset,
        )
        return ListSessionsResult(
            sessions=sessions,
            total=total,
            limit=limit,
            offset=offset,
        )

    def get_stats(self, user_id: str, period: str = "week") -> SessionStats:
        """
        Aggregate a user's completed sessions over a period.

        Args:
            user_id: User ID
            period: One of "week", "month", "year"

        Returns:
            SessionStats for the period

        Raises:
            ValueError: If period is not recognized
        """
        window = STATS_PERIODS.get(period)
        if window is None:
            raise ValueError(
                f"Invalid period '{period}'. Must be one of: {', '.join(STATS_PERIODS)}"
            )

        since = self._clock() - window
        sessions, _ = self._session_store.list_for_user(
            user_id,
            status=SessionStatus.COMPLETED,
            since=since,
            limit=MAX_STATS_SESSIONS,
        )

        stats = SessionStats(period=period, since=since, session_count=len(sessions))
        for session in sessions:
            stats.total_duration_seconds += session.duration_seconds or 0
            stats.total_volume += session.metrics.total_volume
            stats.personal_records += session.metrics.personal_records
        if sessions:
            stats.average_duration_seconds = stats.total_duration_seconds / len(sessions)
        return stats
