"""
Base repository class for database access.

Encapsulates Supabase client access and timestamp conversion shared by
all repositories.
"""

from datetime import datetime
from typing import TypeVar, Generic, Optional, Any
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase-backed repositories.

    Subclasses implement domain-specific data access methods and handle
    row-to-Pydantic model mapping internally.

    Example:
        class UserAccountRepository(BaseRepository[UserAccount]):
            async def get(self, user_id: str) -> Optional[UserAccount]:
                result = self._db.table("user_accounts").select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_account(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _parse_timestamp(value: Any) -> Optional[datetime]:
        """Parse a timestamptz value returned by PostgREST."""
        if value is None or isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))

    @staticmethod
    def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
        """Format a datetime for a PostgREST payload."""
        return value.isoformat() if value is not None else None
