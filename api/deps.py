"""
FastAPI Dependency Providers for the workout session API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Store and use case providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_completion_coordinator, get_current_user
    from application.use_cases import CompletionCoordinator

    @router.post("/sessions/{session_id}/complete")
    def complete_session(
        session_id: str,
        user_id: str = Depends(get_current_user),
        coordinator: CompletionCoordinator = Depends(get_completion_coordinator),
    ):
        return coordinator.complete(session_id, user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_store] = lambda: FakeSessionStore(db)
"""

from functools import lru_cache
from typing import Optional

from fastapi import BackgroundTasks, Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    AuditLogger,
    CacheInvalidator,
    MetricsJournal,
    ProfileRepository,
    RecordLedger,
    SessionStore,
    UnitOfWorkFactory,
)
from application.use_cases import (
    AbortSessionUseCase,
    CompletionCoordinator,
    SessionQueryService,
)

# Concrete implementations
from infrastructure import (
    LoggingCacheInvalidator,
    SupabaseAuditLogger,
    SupabaseMetricsJournal,
    SupabaseProfileRepository,
    SupabaseRecordLedger,
    SupabaseSessionStore,
    SupabaseUnitOfWorkFactory,
)

from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Store Providers
# =============================================================================


def get_session_store(
    client: Client = Depends(get_supabase_client_required),
) -> SessionStore:
    """Get SessionStore implementation."""
    return SupabaseSessionStore(client)


def get_record_ledger(
    client: Client = Depends(get_supabase_client_required),
) -> RecordLedger:
    """Get RecordLedger implementation."""
    return SupabaseRecordLedger(client)


def get_metrics_journal(
    client: Client = Depends(get_supabase_client_required),
) -> MetricsJournal:
    """Get MetricsJournal implementation."""
    return SupabaseMetricsJournal(client)


def get_profile_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProfileRepository:
    """Get ProfileRepository implementation."""
    return SupabaseProfileRepository(client)


def get_uow_factory(
    client: Client = Depends(get_supabase_client_required),
) -> UnitOfWorkFactory:
    """
    Get UnitOfWorkFactory implementation.

    Every store provider must share the backing store of this factory;
    tests override all of them together.
    """
    return SupabaseUnitOfWorkFactory(client)


# =============================================================================
# Collaborator Providers
# =============================================================================


def get_cache_invalidator() -> CacheInvalidator:
    return LoggingCacheInvalidator()


def get_audit_logger(
    client: Client = Depends(get_supabase_client_required),
) -> AuditLogger:
    return SupabaseAuditLogger(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_completion_coordinator(
    background_tasks: BackgroundTasks,
    session_store: SessionStore = Depends(get_session_store),
    record_ledger: RecordLedger = Depends(get_record_ledger),
    metrics_journal: MetricsJournal = Depends(get_metrics_journal),
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    profile_repo: ProfileRepository = Depends(get_profile_repo),
    cache_invalidator: CacheInvalidator = Depends(get_cache_invalidator),
    audit_logger: AuditLogger = Depends(get_audit_logger),
    settings: Settings = Depends(get_settings),
) -> CompletionCoordinator:
    """
    Get CompletionCoordinator with all dependencies injected.

    Post-commit notifications run as background tasks after the response
    is sent.

    Returns:
        CompletionCoordinator: Use case for completing sessions
    """
    return CompletionCoordinator(
        session_store=session_store,
        record_ledger=record_ledger,
        metrics_journal=metrics_journal,
        uow_factory=uow_factory,
        profile_repo=profile_repo,
        cache_invalidator=cache_invalidator,
        audit_logger=audit_logger,
        timeout_seconds=settings.completion_timeout_seconds,
        default_body_weight_kg=settings.default_body_weight_kg,
        schedule=background_tasks.add_task,
    )


def get_abort_session_use_case(
    background_tasks: BackgroundTasks,
    session_store: SessionStore = Depends(get_session_store),
    uow_factory: UnitOfWorkFactory = Depends(get_uow_factory),
    cache_invalidator: CacheInvalidator = Depends(get_cache_invalidator),
    audit_logger: AuditLogger = Depends(get_audit_logger),
    settings: Settings = Depends(get_settings),
) -> AbortSessionUseCase:
    return AbortSessionUseCase(
        session_store=session_store,
        uow_factory=uow_factory,
        cache_invalidator=cache_invalidator,
        audit_logger=audit_logger,
        timeout_seconds=settings.completion_timeout_seconds,
        schedule=background_tasks.add_task,
    )


def get_session_query_service(
    session_store: SessionStore = Depends(get_session_store),
) -> SessionQueryService:
    return SessionQueryService(session_store=session_store)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
        settings=settings,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Stores
    "get_session_store",
    "get_record_ledger",
    "get_metrics_journal",
    "get_profile_repo",
    "get_uow_factory",
    # Collaborators
    "get_cache_invalidator",
    "get_audit_logger",
    # Use cases
    "get_completion_coordinator",
    "get_abort_session_use_case",
    "get_session_query_service",
    # Authentication
    "get_current_user",
]
