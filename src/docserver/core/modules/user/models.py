from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from docserver.core.db import MongoModel
from docserver.utils import now


class User(MongoModel):
    """User domain model with credentials and the current session."""

    login: str
    password_hash: str  # bcrypt hash
    token: str | None = None  # Current session token, None when logged out
    token_expiry: datetime | None = None
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    login: str = Field(..., description="Login")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, login=user.login, created_at=user.created_at)
