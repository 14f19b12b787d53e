"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.

Two families:
- WorkoutSessionError: the domain error taxonomy returned to callers
- StoreError: raised by persistence adapters and mapped by use cases and read endpoints
"""

from typing import List, Optional


# =============================================================================
# Domain errors (surfaced to callers)
# =============================================================================


class WorkoutSessionError(Exception):
    """Base error for session lifecycle operations."""

    error_code = "SESSION_ERROR"
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionNotFoundError(WorkoutSessionError):
    """Session does not exist."""

    error_code = "NOT_FOUND"


class SessionForbiddenError(WorkoutSessionError):
    """Session exists but belongs to a different user."""

    error_code = "FORBIDDEN"


class SessionAlreadyCompletedError(WorkoutSessionError):
    """Session already reached a terminal status."""

    error_code = "ALREADY_COMPLETED"


class ConcurrentCompletionError(WorkoutSessionError):
    """Another request finished the session first.

    Not retryable: the winner already completed the session.
    """

    error_code = "CONCURRENT_COMPLETION"


class SetValidationError(WorkoutSessionError):
    """Logged set data is malformed."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class TransactionAbortedError(WorkoutSessionError):
    """Transient infrastructure failure; nothing was written.

    Safe to retry: a retry after an unacknowledged commit is rejected with
    SessionAlreadyCompletedError instead of duplicating writes.
    """

    error_code = "TRANSACTION_ABORTED"
    retryable = True


class InternalCompletionError(WorkoutSessionError):
    """Unexpected failure; the unit of work was rolled back."""

    error_code = "INTERNAL_ERROR"


# =============================================================================
# Store errors (raised by adapters)
# =============================================================================


class StoreError(Exception):
    """Base error for persistence adapters."""

    pass


class ConditionalWriteError(StoreError):
    """A conditional write found a different status than expected."""

    def __init__(self, message: str, *, session_id: Optional[str] = None):
        super().__init__(message)
        self.session_id = session_id


class TransientStoreError(StoreError):
    """Retryable failure such as a dropped connection or serialization error."""

    pass


class TransactionTimeoutError(TransientStoreError):
    """The unit of work exceeded its deadline before commit."""

    pass
