"""
Post-commit Collaborator Interfaces (Ports).

Side effects that run only after a unit of work has committed. Failures in
these collaborators are logged by the caller and never undo the commit.
"""
from typing import Any, Dict, Optional, Protocol


class CacheInvalidator(Protocol):
    """Purges cached session and progress views."""

    def invalidate_user_views(self, user_id: str, session_id: str) -> None:
        """
        Purge cached views for a user after one of their sessions changed.

        Args:
            user_id: Owner of the session
            session_id: Session that changed
        """
        ...


class AuditLogger(Protocol):
    """Records audit events."""

    def record(
        self,
        event: str,
        user_id: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Record an audit event.

        Args:
            event: Event name (e.g. "session.completed")
            user_id: Acting user
            resource_id: Affected resource ID
            details: Extra event data
        """
        ...
