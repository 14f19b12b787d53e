"""
Domain converters between Supabase rows and the typed domain models.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import row_to_session, session_to_row

    >>> row = session_to_row(session)
    >>> session = row_to_session(row)
"""

from domain.converters.db_converters import (
    progress_entry_to_row,
    record_to_row,
    row_to_progress_entry,
    row_to_record,
    row_to_session,
    session_to_row,
)

__all__ = [
    "row_to_session",
    "session_to_row",
    "row_to_record",
    "record_to_row",
    "row_to_progress_entry",
    "progress_entry_to_row",
]
