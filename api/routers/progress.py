"""
Progress router.

- /progress/entries - List the user's progress time series
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_current_user, get_metrics_journal
from api.errors import read_errors
from application.ports import MetricsJournal

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/progress",
    tags=["Progress"],
)


@router.get("/entries")
def list_progress_entries_endpoint(
    metric: Optional[str] = Query(default=None, max_length=200),
    limit: int = Query(default=100, ge=1, le=500),
    user_id: str = Depends(get_current_user),
    metrics_journal: MetricsJournal = Depends(get_metrics_journal),
):
    """List progress entries, most recent first, optionally for one metric."""
    with read_errors("list progress entries"):
        entries = metrics_journal.list_for_user(user_id, metric=metric, limit=limit)
    return {
        "success": True,
        "entries": [e.model_dump(mode="json") for e in entries],
        "count": len(entries),
    }
