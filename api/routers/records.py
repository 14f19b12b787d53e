"""
Personal records router.

- /records - List the user's current personal records
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_current_user, get_record_ledger
from api.errors import read_errors
from application.ports import RecordLedger

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Records"],
)


@router.get("/records")
def list_records_endpoint(
    exercise_id: Optional[str] = Query(default=None),
    user_id: str = Depends(get_current_user),
    record_ledger: RecordLedger = Depends(get_record_ledger),
):
    """
    List current personal records, most recent first.

    Each record includes the value it superseded, if any.
    """
    with read_errors("list personal records"):
        records = record_ledger.list_for_user(user_id, exercise_id=exercise_id)
    return {
        "success": True,
        "records": [r.model_dump(mode="json") for r in records],
        "count": len(records),
    }
