"""
Metrics Journal Interface (Port).

This module defines the abstract interface for the append-only progress
time series. Entries are never updated or deleted.
"""
from typing import List, Optional, Protocol

from application.ports.unit_of_work import UnitOfWork
from domain.models import ProgressEntry


class MetricsJournal(Protocol):
    """
    Abstract interface for progress entry persistence.
    """

    def append(self, uow: UnitOfWork, entry: ProgressEntry) -> ProgressEntry:
        """
        Stage a new progress entry.

        Args:
            uow: Unit of work the insert is enlisted in
            entry: Entry to append

        Returns:
            The staged entry with its ID assigned
        """
        ...

    def list_for_user(
        self,
        user_id: str,
        *,
        metric: Optional[str] = None,
        limit: int = 100,
    ) -> List[ProgressEntry]:
        """
        List a user's progress entries, most recent first.

        Args:
            user_id: User ID
            metric: Only entries for this metric key
            limit: Maximum entries to return

        Returns:
            List of ProgressEntry
        """
        ...
