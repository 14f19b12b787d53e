"""
Post-commit collaborators: audit logging and cache invalidation.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseAuditLogger:
    """Writes audit events to the audit_logs table."""

    def __init__(self, client: Client):
        self._client = client

    def record(
        self,
        event: str,
        user_id: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._client.table("audit_logs").insert({
            "event": event,
            "user_id": user_id,
            "resource_id": resource_id,
            "details": details or {},
            "created_at": datetime.now(timezone.utc).isoformat(),
        }).execute()


class LoggingCacheInvalidator:
    """
    Cache invalidator for deployments without a response cache.

    Only logs the purge so the post-commit hook stays observable.
    """

    def invalidate_user_views(self, user_id: str, session_id: str) -> None:
        logger.debug(f"Invalidating cached views for user {user_id} (session {session_id})")
