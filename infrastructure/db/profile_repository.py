"""
Supabase implementation of ProfileRepository.
"""
import logging
from typing import Optional

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseProfileRepository:
    """
    Read-only body weight lookups on the profiles table.

    Lookup failures are logged and treated as "unknown" so completion can
    fall back to the default body weight.
    """

    def __init__(self, client: Client):
        self._client = client

    def get_body_weight_kg(self, user_id: str) -> Optional[float]:
        try:
            result = (
                self._client.table("profiles")
                .select("body_weight_kg")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to get body weight for user {user_id}: {e}")
            return None

        if not result.data:
            return None
        value = result.data[0].get("body_weight_kg")
        return float(value) if value is not None else None
