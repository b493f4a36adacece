"""Durable user storage."""

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError

from docserver.core.modules.user.models import User
from docserver.errors import InvalidLoginError


class UserStore(Protocol):
    """Source of truth for users and their current session.

    Lookups return None when nothing matches; storage failures raise.
    """

    async def create_indexes(self) -> None: ...

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_login(self, login: str) -> User | None: ...

    async def get_by_token(self, token: str) -> User | None: ...

    async def create(self, user: User) -> None:
        """Insert a new user; InvalidLoginError if the login is taken."""

    async def update_token(self, user_id: UUID, token: str | None, expiry: datetime | None) -> None: ...


class MongoUserStore:
    """UserStore backed by the `users` collection."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def create_indexes(self) -> None:
        await self._collection.create_index([("login", 1)], unique=True)
        await self._collection.create_index([("token", 1)])

    async def get_by_id(self, user_id: UUID) -> User | None:
        return User.from_mongo(await self._collection.find_one({"_id": user_id}))

    async def get_by_login(self, login: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"login": login}))

    async def get_by_token(self, token: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"token": token}))

    async def create(self, user: User) -> None:
        """Insert a new user.

        Raises:
            InvalidLoginError: If the login is already taken
        """
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise InvalidLoginError(f"User '{user.login}' already exists") from e

    async def update_token(self, user_id: UUID, token: str | None, expiry: datetime | None) -> None:
        await self._collection.update_one({"_id": user_id}, {"$set": {"token": token, "token_expiry": expiry}})
