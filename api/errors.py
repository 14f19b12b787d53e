"""
HTTP mapping of session lifecycle errors.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException

from application.exceptions import (
    InternalCompletionError,
    SetValidationError,
    StoreError,
    TransactionAbortedError,
    TransientStoreError,
    WorkoutSessionError,
)

logger = logging.getLogger(__name__)

# error_code -> HTTP status
ERROR_STATUS_CODES = {
    "NOT_FOUND": 404,
    "FORBIDDEN": 403,
    "ALREADY_COMPLETED": 409,
    "CONCURRENT_COMPLETION": 409,
    "VALIDATION_ERROR": 422,
    "TRANSACTION_ABORTED": 503,
    "INTERNAL_ERROR": 500,
}


def to_http_exception(error: WorkoutSessionError) -> HTTPException:
    """Build the HTTPException for a domain error."""
    detail = {
        "error_code": error.error_code,
        "message": error.message,
        "retryable": error.retryable,
        "errors": error.errors if isinstance(error, SetValidationError) else [],
    }
    headers = {"Retry-After": "1"} if error.retryable else None
    return HTTPException(
        status_code=ERROR_STATUS_CODES.get(error.error_code, 500),
        detail=detail,
        headers=headers,
    )


@contextmanager
def read_errors(action: str) -> Iterator[None]:
    """
    Map store failures during a read to the same responses writes use.

    Transient failures become 503 TRANSACTION_ABORTED with Retry-After;
    any other StoreError is logged and becomes 500 INTERNAL_ERROR.

    Usage:
        with read_errors("list sessions"):
            sessions = store.list_for_user(user_id)
    """
    try:
        yield
    except TransientStoreError as e:
        logger.warning(f"Transient failure during {action}: {e}")
        raise to_http_exception(
            TransactionAbortedError(f"Could not {action}, please retry")
        ) from e
    except StoreError as e:
        logger.exception(f"Store failure during {action}: {e}")
        raise to_http_exception(
            InternalCompletionError(f"Could not {action}")
        ) from e
