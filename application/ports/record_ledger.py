"""
Record Ledger Interface (Port).

This module defines the abstract interface for the personal record ledger:
one current record per (user, exercise, record type), with a single-level
pointer to the value it superseded.
"""
from typing import List, Optional, Protocol

from application.ports.unit_of_work import UnitOfWork
from domain.models import PersonalRecord, RecordType


class RecordLedger(Protocol):
    """
    Abstract interface for personal record persistence.
    """

    def get_current(
        self,
        uow: Optional[UnitOfWork],
        user_id: str,
        exercise_id: str,
        record_type: RecordType,
    ) -> Optional[PersonalRecord]:
        """
        Read the current record for a key.

        Args:
            uow: Unit of work to read through (sees its staged records)
            user_id: User ID
            exercise_id: Canonical exercise ID
            record_type: Record type

        Returns:
            Current PersonalRecord or None if the user has none yet
        """
        ...

    def write(self, uow: UnitOfWork, record: PersonalRecord) -> PersonalRecord:
        """
        Make ``record`` the current record for its key.

        Reads the current slot through ``uow``, moves it into the new
        record's ``previous`` snapshot and stages the result.

        Args:
            uow: Unit of work the write is enlisted in
            record: New record (its previous field is ignored)

        Returns:
            The staged record, with previous filled in
        """
        ...

    def list_for_user(
        self,
        user_id: str,
        *,
        exercise_id: Optional[str] = None,
    ) -> List[PersonalRecord]:
        """
        List a user's current records, most recent first.

        Args:
            user_id: User ID
            exercise_id: Only records for this exercise

        Returns:
            List of PersonalRecord
        """
        ...
