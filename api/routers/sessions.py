"""
Sessions router for workout session lifecycle.

This router contains endpoints for:
- /sessions - List the user's sessions
- /sessions/stats - Aggregate stats over a period
- /sessions/{session_id} - Get a session
- /sessions/{session_id}/complete - Complete a session
- /sessions/{session_id}/abort - Abort a session

IMPORTANT: /sessions/stats is registered before /sessions/{session_id} so
"stats" is not parsed as a session ID.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import (
    get_abort_session_use_case,
    get_completion_coordinator,
    get_current_user,
    get_session_query_service,
)
from api.errors import read_errors, to_http_exception
from application.use_cases import (
    AbortSessionUseCase,
    CompletionCoordinator,
    SessionQueryService,
)
from domain.models import SessionStatus

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)


@router.get("")
def list_sessions_endpoint(
    status: Optional[SessionStatus] = Query(default=None),
    since: Optional[datetime] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user),
    queries: SessionQueryService = Depends(get_session_query_service),
):
    """List the user's sessions, newest first."""
    with read_errors("list sessions"):
        result = queries.list_sessions(
            user_id,
            status=status,
            since=since,
            limit=limit,
            offset=offset,
        )
    return {
        "success": True,
        "sessions": [s.model_dump(mode="json") for s in result.sessions],
        "total": result.total,
        "limit": result.limit,
        "offset": result.offset,
    }


@router.get("/stats")
def session_stats_endpoint(
    period: str = Query(default="week", pattern="^(week|month|year)$"),
    user_id: str = Depends(get_current_user),
    queries: SessionQueryService = Depends(get_session_query_service),
):
    """Aggregate completed sessions over the last week, month or year."""
    try:
        with read_errors("load session stats"):
            stats = queries.get_stats(user_id, period)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "success": True,
        "period": stats.period,
        "since": stats.since.isoformat(),
        "session_count": stats.session_count,
        "total_duration_seconds": stats.total_duration_seconds,
        "total_volume": stats.total_volume,
        "personal_records": stats.personal_records,
        "average_duration_seconds": stats.average_duration_seconds,
    }


@router.get("/{session_id}")
def get_session_endpoint(
    session_id: str,
    user_id: str = Depends(get_current_user),
    queries: SessionQueryService = Depends(get_session_query_service),
):
    """Get a single session owned by the user."""
    with read_errors("load session"):
        result = queries.get_session(session_id, user_id)
    if not result.success:
        raise to_http_exception(result.error)
    return {"success": True, "session": result.session.model_dump(mode="json")}


@router.post("/{session_id}/complete")
def complete_session_endpoint(
    session_id: str,
    user_id: str = Depends(get_current_user),
    coordinator: CompletionCoordinator = Depends(get_completion_coordinator),
):
    """
    Complete an in-progress session.

    Computes the session metrics, flags personal record sets and appends
    progress entries in one atomic write.

    Returns:
        The completed session with new_records and progress_entries
    """
    result = coordinator.complete(session_id, user_id)
    if not result.success:
        raise to_http_exception(result.error)

    return {
        "success": True,
        "session": result.session.model_dump(mode="json"),
        "new_records": [r.model_dump(mode="json") for r in result.new_records],
        "progress_entries": [e.model_dump(mode="json") for e in result.progress_entries],
    }


@router.post("/{session_id}/abort")
def abort_session_endpoint(
    session_id: str,
    user_id: str = Depends(get_current_user),
    use_case: AbortSessionUseCase = Depends(get_abort_session_use_case),
):
    """Abandon an in-progress session without recording progress."""
    result = use_case.abort(session_id, user_id)
    if not result.success:
        raise to_http_exception(result.error)
    return {"success": True, "session": result.session.model_dump(mode="json")}
