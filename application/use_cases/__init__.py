"""
Application Use Cases for the workout session API.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import CompletionCoordinator

    coordinator = CompletionCoordinator(
        session_store=session_store,
        record_ledger=record_ledger,
        metrics_journal=metrics_journal,
        uow_factory=uow_factory,
        profile_repo=profile_repo,
    )
    result = coordinator.complete("session-1", "user-1")
"""

from application.use_cases.abort_session import (
    AbortSessionResult,
    AbortSessionUseCase,
)
from application.use_cases.complete_session import (
    CompleteSessionResult,
    CompletionCoordinator,
)
from application.use_cases.get_session import (
    GetSessionResult,
    ListSessionsResult,
    SessionQueryService,
    SessionStats,
)

__all__ = [
    # CompleteSession
    "CompletionCoordinator",
    "CompleteSessionResult",
    # AbortSession
    "AbortSessionUseCase",
    "AbortSessionResult",
    # Queries
    "SessionQueryService",
    "GetSessionResult",
    "ListSessionsResult",
    "SessionStats",
]
