"""
Infrastructure Layer for the workout session API.

This package contains concrete implementations of the application ports:
- db/: Supabase database implementations
- collaborators: audit logging and cache invalidation
"""

# Re-export database adapters for convenient access
from infrastructure.db import (
    SupabaseMetricsJournal,
    SupabaseProfileRepository,
    SupabaseRecordLedger,
    SupabaseSessionStore,
    SupabaseUnitOfWork,
    SupabaseUnitOfWorkFactory,
)
from infrastructure.collaborators import LoggingCacheInvalidator, SupabaseAuditLogger

__all__ = [
    "SupabaseUnitOfWork",
    "SupabaseUnitOfWorkFactory",
    "SupabaseSessionStore",
    "SupabaseRecordLedger",
    "SupabaseMetricsJournal",
    "SupabaseProfileRepository",
    "SupabaseAuditLogger",
    "LoggingCacheInvalidator",
]
