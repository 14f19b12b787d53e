"""
Translation of Supabase / PostgREST failures into store errors.

Use cases never see postgrest or httpx exceptions; adapters wrap every call
in ``store_errors`` so failures surface as the StoreError family from
application.exceptions.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

import httpx
from postgrest.exceptions import APIError

from application.exceptions import (
    ConditionalWriteError,
    StoreError,
    TransientStoreError,
)

logger = logging.getLogger(__name__)

# Raised by commit_workout_unit_of_work when a session status guard fails
CONDITIONAL_WRITE_SQLSTATE = "WK409"

# serialization_failure, deadlock_detected, lock_not_available, query_canceled
TRANSIENT_SQLSTATES = frozenset({"40001", "40P01", "55P03", "57014"})


def translate_api_error(error: APIError, operation: str) -> StoreError:
    """Map a PostgREST error to the matching StoreError."""
    code = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error)

    if code == CONDITIONAL_WRITE_SQLSTATE:
        return ConditionalWriteError(f"{operation}: {message}")
    if code in TRANSIENT_SQLSTATES:
        return TransientStoreError(f"{operation}: {message} ({code})")
    return StoreError(f"{operation} failed: {message} ({code})")


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Translate Supabase client failures raised inside the block.

    Args:
        operation: Short description used in error messages and logs
    """
    try:
        yield
    except APIError as e:
        logger.error(f"Supabase error during {operation}: {e}")
        raise translate_api_error(e, operation) from e
    except httpx.TransportError as e:
        logger.warning(f"Supabase transport error during {operation}: {e}")
        raise TransientStoreError(f"{operation}: {e}") from e
