"""
Repository Interfaces (Ports) for the workout session API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionStore, RecordLedger, UnitOfWorkFactory

    class CompletionCoordinator:
        def __init__(self, session_store: SessionStore, ...):
            self._session_store = session_store
"""

# Transaction boundary
from application.ports.unit_of_work import (
    StagedChanges,
    StagedSessionWrite,
    UnitOfWork,
    UnitOfWorkFactory,
)

# Session persistence
from application.ports.session_store import SessionStore

# Personal records
from application.ports.record_ledger import RecordLedger

# Progress time series
from application.ports.metrics_journal import MetricsJournal

# Profile lookups
from application.ports.profile_repository import ProfileRepository

# Post-commit collaborators
from application.ports.collaborators import AuditLogger, CacheInvalidator

__all__ = [
    # Unit of work
    "UnitOfWork",
    "UnitOfWorkFactory",
    "StagedChanges",
    "StagedSessionWrite",
    # Stores
    "SessionStore",
    "RecordLedger",
    "MetricsJournal",
    "ProfileRepository",
    # Collaborators
    "CacheInvalidator",
    "AuditLogger",
]
