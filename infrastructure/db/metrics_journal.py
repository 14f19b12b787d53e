"""
Supabase implementation of MetricsJournal.

progress_entries is append-only: the journal never updates or deletes rows.
"""
import logging
import uuid
from typing import List, Optional

from supabase import Client

from application.ports.unit_of_work import UnitOfWork
from domain.converters import row_to_progress_entry
from domain.models import ProgressEntry
from infrastructure.db.errors import store_errors

logger = logging.getLogger(__name__)

PROGRESS_TABLE = "progress_entries"


class SupabaseMetricsJournal:
    """Supabase implementation of MetricsJournal protocol."""

    def __init__(self, client: Client):
        self._client = client

    def append(self, uow: UnitOfWork, entry: ProgressEntry) -> ProgressEntry:
        if entry.id is None:
            entry = entry.model_copy(update={"id": str(uuid.uuid4())})
        uow.changes.stage_progress_entry(entry)
        return entry

    def list_for_user(
        self,
        user_id: str,
        *,
        metric: Optional[str] = None,
        limit: int = 100,
    ) -> List[ProgressEntry]:
        with store_errors(f"list progress entries for user {user_id}"):
            query = self._client.table(PROGRESS_TABLE).select("*").eq("user_id", user_id)
            if metric:
                query = query.eq("metric", metric)
            result = query.order("recorded_at", desc=True).limit(limit).execute()

        return [row_to_progress_entry(row) for row in result.data or []]
