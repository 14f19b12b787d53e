"""
API package for the workout session API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: HTTP mapping of domain errors
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_abort_session_use_case,
    get_completion_coordinator,
    get_current_user,
    get_session_query_service,
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Use cases
    "get_completion_coordinator",
    "get_abort_session_use_case",
    "get_session_query_service",
    # Authentication
    "get_current_user",
]
