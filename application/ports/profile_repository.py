"""
Profile Repository Interface (Port).

Read-only access to the user profile data the completion engine needs.
Profile CRUD is owned elsewhere.
"""
from typing import Optional, Protocol


class ProfileRepository(Protocol):
    """
    Abstract interface for user profile lookups.
    """

    def get_body_weight_kg(self, user_id: str) -> Optional[float]:
        """
        Get the user's body weight.

        Args:
            user_id: User ID

        Returns:
            Body weight in kilograms, or None if unknown
        """
        ...
