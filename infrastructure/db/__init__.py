"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the ports defined in
application.ports. These implementations can be injected into use cases and
routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSessionStore,
        SupabaseRecordLedger,
        SupabaseMetricsJournal,
        SupabaseUnitOfWorkFactory,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate adapters with injected client
    session_store = SupabaseSessionStore(client)
    record_ledger = SupabaseRecordLedger(client)
    metrics_journal = SupabaseMetricsJournal(client)
    uow_factory = SupabaseUnitOfWorkFactory(client)
"""

from infrastructure.db.metrics_journal import SupabaseMetricsJournal
from infrastructure.db.profile_repository import SupabaseProfileRepository
from infrastructure.db.record_ledger import SupabaseRecordLedger
from infrastructure.db.session_store import SupabaseSessionStore
from infrastructure.db.unit_of_work import (
    SupabaseUnitOfWork,
    SupabaseUnitOfWorkFactory,
)

__all__ = [
    # Transaction boundary
    "SupabaseUnitOfWork",
    "SupabaseUnitOfWorkFactory",

    # Stores
    "SupabaseSessionStore",
    "SupabaseRecordLedger",
    "SupabaseMetricsJournal",

    # Profiles
    "SupabaseProfileRepository",
]
