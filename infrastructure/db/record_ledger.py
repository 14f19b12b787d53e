"""
Supabase implementation of RecordLedger.

The personal_records table has a unique constraint on
(user_id, exercise_id, record_type); each row is the current record for its
key and carries the value it superseded in previous_value /
previous_achieved_at.
"""
import logging
from typing import List, Optional

from supabase import Client

from application.ports.unit_of_work import UnitOfWork
from domain.converters import row_to_record
from domain.models import PersonalRecord, RecordKey, RecordType
from infrastructure.db.errors import store_errors

logger = logging.getLogger(__name__)

RECORDS_TABLE = "personal_records"


class SupabaseRecordLedger:
    """
    Supabase implementation of RecordLedger protocol.
    """

    def __init__(self, client: Client):
        self._client = client

    def get_current(
        self,
        uow: Optional[UnitOfWork],
        user_id: str,
        exercise_id: str,
        record_type: RecordType,
    ) -> Optional[PersonalRecord]:
        """Read the current record, preferring one staged in ``uow``."""
        if uow is not None:
            staged = uow.changes.staged_record(RecordKey(user_id, exercise_id, record_type))
            if staged is not None:
                return staged

        with store_errors(f"load {record_type.value} record for {exercise_id}"):
            result = (
                self._client.table(RECORDS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .eq("exercise_id", exercise_id)
                .eq("record_type", record_type.value)
                .limit(1)
                .execute()
            )

        if not result.data:
            return None
        return row_to_record(result.data[0])

    def write(self, uow: UnitOfWork, record: PersonalRecord) -> PersonalRecord:
        """Stage ``record`` as the current record for its key."""
        current = self.get_current(
            uow, record.user_id, record.exercise_id, record.record_type
        )
        new_record = record.superseding(current)
        uow.changes.stage_record(new_record)
        logger.debug(
            f"Staged {record.record_type.value} record {record.value} "
            f"for {record.user_id}/{record.exercise_id}"
        )
        return new_record

    def list_for_user(
        self,
        user_id: str,
        *,
        exercise_id: Optional[str] = None,
    ) -> List[PersonalRecord]:
        """List a user's current records, most recent first."""
        with store_errors(f"list records for user {user_id}"):
            query = self._client.table(RECORDS_TABLE).select("*").eq("user_id", user_id)
            if exercise_id:
                query = query.eq("exercise_id", exercise_id)
            result = query.order("achieved_at", desc=True).execute()

        return [row_to_record(row) for row in result.data or []]
