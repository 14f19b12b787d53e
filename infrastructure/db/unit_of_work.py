"""
Supabase implementation of UnitOfWork.

Writes are staged in memory and applied by a single PostgreSQL stored
procedure, so the session update, record upserts and progress inserts
happen in one database transaction. If any statement fails, the whole
commit is rolled back by PostgreSQL.

Each staged record carries the value its slot held when it was read
(``expected_value``). A slot changed by another commit in the meantime
fails the whole unit of work with serialization_failure (40001), which is
retryable: the retry re-reads the new baseline.

Required database function:

    CREATE OR REPLACE FUNCTION commit_workout_unit_of_work(
        p_sessions jsonb,
        p_records jsonb,
        p_progress_entries jsonb
    ) RETURNS boolean AS $$
    DECLARE
        s jsonb;
        r jsonb;
        rows_affected integer;
    BEGIN
        FOR s IN SELECT * FROM jsonb_array_elements(p_sessions) LOOP
            UPDATE workout_sessions
            SET status = s->'row'->>'status',
                end_time = (s->'row'->>'end_time')::timestamptz,
                duration_seconds = (s->'row'->>'duration_seconds')::integer,
                exercises = s->'row'->'exercises',
                metrics = s->'row'->'metrics',
                notes = s->'row'->>'notes',
                updated_at = now()
            WHERE id = s->'row'->>'id'
              AND status = s->>'expected_status';
            GET DIAGNOSTICS rows_affected = ROW_COUNT;
            IF rows_affected = 0 THEN
                RAISE EXCEPTION 'session % is no longer %',
                    s->'row'->>'id', s->>'expected_status'
                    USING ERRCODE = 'WK409';
            END IF;
        END LOOP;

        FOR r IN SELECT * FROM jsonb_array_elements(p_records) LOOP
            INSERT INTO personal_records AS pr (
                user_id, exercise_id, record_type, value, achieved_at,
                session_id, previous_value, previous_achieved_at
            )
            VALUES (
                r->'row'->>'user_id', r->'row'->>'exercise_id',
                r->'row'->>'record_type', (r->'row'->>'value')::numeric,
                (r->'row'->>'achieved_at')::timestamptz, r->'row'->>'session_id',
                (r->'row'->>'previous_value')::numeric,
                (r->'row'->>'previous_achieved_at')::timestamptz
            )
            ON CONFLICT (user_id, exercise_id, record_type) DO UPDATE
            SET value = excluded.value,
                achieved_at = excluded.achieved_at,
                session_id = excluded.session_id,
                previous_value = excluded.previous_value,
                previous_achieved_at = excluded.previous_achieved_at
            WHERE pr.value = (r->>'expected_value')::numeric;
            GET DIAGNOSTICS rows_affected = ROW_COUNT;
            IF rows_affected = 0 THEN
                RAISE EXCEPTION '% record for % changed since it was read',
                    r->'row'->>'record_type', r->'row'->>'exercise_id'
                    USING ERRCODE = '40001';
            END IF;
        END LOOP;

        INSERT INTO progress_entries (
            id, user_id, category, metric, recorded_at, value, unit,
            session_id, exercise_id, notes, source
        )
        SELECT e->>'id', e->>'user_id', e->>'category', e->>'metric',
               (e->>'recorded_at')::timestamptz, (e->>'value')::numeric,
               e->>'unit', e->>'session_id', e->>'exercise_id',
               e->>'notes', e->>'source'
        FROM jsonb_array_elements(p_progress_entries) AS e;

        RETURN true;
    END;
    $$ LANGUAGE plpgsql;
"""
import logging
import time
from typing import Any, Callable, Dict, Optional

from supabase import Client

from application.exceptions import TransactionTimeoutError
from application.ports.unit_of_work import StagedChanges
from domain.converters import progress_entry_to_row, record_to_row, session_to_row
from infrastructure.db.errors import store_errors

logger = logging.getLogger(__name__)

COMMIT_RPC = "commit_workout_unit_of_work"


class SupabaseUnitOfWork:
    """
    Supabase implementation of the UnitOfWork protocol.

    The unit of work carries an optional deadline. Commit after the deadline
    discards the staged writes and raises TransactionTimeoutError.
    """

    def __init__(
        self,
        client: Client,
        *,
        timeout_seconds: Optional[float] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            timeout_seconds: Deadline for commit, measured from now
            monotonic: Clock used for the deadline
        """
        self._client = client
        self._monotonic = monotonic
        self._changes = StagedChanges()
        self._active = True
        self._deadline = (
            monotonic() + timeout_seconds if timeout_seconds is not None else None
        )

    @property
    def changes(self) -> StagedChanges:
        return self._changes

    @property
    def is_active(self) -> bool:
        return self._active

    def commit(self) -> None:
        """Apply all staged writes through one RPC call."""
        if not self._active:
            raise RuntimeError("Unit of work is no longer active")

        if self._deadline is not None and self._monotonic() > self._deadline:
            self.rollback()
            raise TransactionTimeoutError("Unit of work deadline exceeded before commit")

        if self._changes.is_empty:
            self._active = False
            return

        payload = self._build_payload()
        try:
            with store_errors("commit unit of work"):
                self._client.rpc(COMMIT_RPC, payload).execute()
        except Exception:
            self.rollback()
            raise

        logger.info(
            "Committed unit of work: %d session(s), %d record(s), %d progress entr(ies)",
            len(payload["p_sessions"]),
            len(payload["p_records"]),
            len(payload["p_progress_entries"]),
        )
        self._changes.clear()
        self._active = False

    def rollback(self) -> None:
        """Discard all staged writes. Nothing reached the database yet."""
        if self._active and not self._changes.is_empty:
            logger.debug("Rolling back unit of work with staged changes")
        self._changes.clear()
        self._active = False

    def _build_payload(self) -> Dict[str, Any]:
        return {
            "p_sessions": [
                {
                    "row": session_to_row(staged.session),
                    "expected_status": staged.expected_status.value,
                }
                for staged in self._changes.sessions.values()
            ],
            "p_records": [
                {"row": record_to_row(r), "expected_value": r.superseded_value}
                for r in self._changes.records.values()
            ],
            "p_progress_entries": [
                progress_entry_to_row(e) for e in self._changes.progress_entries
            ],
        }

    def __enter__(self) -> "SupabaseUnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._active:
            self.rollback()


class SupabaseUnitOfWorkFactory:
    """Opens SupabaseUnitOfWork instances on one client."""

    def __init__(self, client: Client):
        self._client = client

    def begin(self, *, timeout_seconds: Optional[float] = None) -> SupabaseUnitOfWork:
        return SupabaseUnitOfWork(self._client, timeout_seconds=timeout_seconds)
