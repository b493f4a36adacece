"""Session management models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class SessionClaims(BaseModel):
    """Claims carried by a signed session token."""

    user_id: UUID
    login: str
    issued_at: datetime
    expires_at: datetime
    token_id: str  # Random per token, keeps tokens issued in the same second distinct
