"""
JWT claim models.

The authenticated user itself lives in shared.models so modules can use
it without depending on the API package.
"""

from pydantic import BaseModel
from typing import Optional


class TokenPayload(BaseModel):
    """Supabase JWT payload structure."""
    sub: str  # User ID
    email: str
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    role: Optional[str] = None
