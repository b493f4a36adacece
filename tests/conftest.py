"""Shared pytest fixtures."""

from datetime import datetime
from uuid import UUID

import pytest

from docserver.app import App
from docserver.config import Config
from docserver.core.core import Core, Stores
from docserver.core.modules.document.models import Document
from docserver.core.modules.user.models import User
from docserver.errors import InvalidLoginError

ADMIN_TOKEN = "admin-secret-token"
PASSWORD = "Secur3P@ss"


class InMemoryUserStore:
    """UserStore keeping copies of users in a dict, like a database would."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}

    async def create_indexes(self) -> None:
        pass

    async def get_by_id(self, user_id: UUID) -> User | None:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user is not None else None

    async def get_by_login(self, login: str) -> User | None:
        return next((u.model_copy(deep=True) for u in self.users.values() if u.login == login), None)

    async def get_by_token(self, token: str) -> User | None:
        return next((u.model_copy(deep=True) for u in self.users.values() if u.token == token), None)

    async def create(self, user: User) -> None:
        if any(u.login == user.login for u in self.users.values()):
            raise InvalidLoginError(f"User '{user.login}' already exists")
        self.users[user.id] = user.model_copy(deep=True)

    async def update_token(self, user_id: UUID, token: str | None, expiry: datetime | None) -> None:
        user = self.users.get(user_id)
        if user is not None:
            self.users[user_id] = user.model_copy(update={"token": token, "token_expiry": expiry})


class InMemoryDocumentStore:
    """DocumentStore keeping copies of documents in a dict."""

    def __init__(self) -> None:
        self.documents: dict[UUID, Document] = {}
        self.reads = 0

    async def create_indexes(self) -> None:
        pass

    async def get_by_id(self, document_id: UUID) -> Document | None:
        self.reads += 1
        document = self.documents.get(document_id)
        return document.model_copy(deep=True) if document is not None else None

    async def list_by_owner(self, owner_id: UUID, limit: int) -> list[Document]:
        self.reads += 1
        found = [d for d in self.documents.values() if d.owner == owner_id]
        return [d.model_copy(deep=True) for d in sorted(found, key=lambda d: (d.name, d.created))][:limit]

    async def list_shared(self, viewer_login: str, owner_id: UUID, limit: int) -> list[Document]:
        self.reads += 1
        found = [
            d for d in self.documents.values() if d.owner == owner_id and (d.public or viewer_login in d.grant)
        ]
        return [d.model_copy(deep=True) for d in sorted(found, key=lambda d: (d.name, d.created))][:limit]

    async def create(self, document: Document) -> None:
        self.documents[document.id] = document.model_copy(deep=True)

    async def delete(self, document_id: UUID) -> None:
        self.documents.pop(document_id, None)


@pytest.fixture
def config(tmp_path):
    """Configuration with a fixed secret and cheap password hashing."""
    return Config(
        database_url="mongodb://localhost:27017/docserver_test",
        admin_token=ADMIN_TOKEN,
        jwt_secret="test-secret-key-with-at-least-32-bytes",
        upload_dir=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
    )


@pytest.fixture
def stores():
    return Stores(users=InMemoryUserStore(), documents=InMemoryDocumentStore())


@pytest.fixture
def core(config, stores):
    return Core(config, stores)


@pytest.fixture
def app(config, stores):
    return App(config, stores)


@pytest.fixture
async def register(core):
    """Register a user with the shared test password and return it."""

    async def _register(login: str) -> User:
        return await core.services.user.register(ADMIN_TOKEN, login, PASSWORD)

    return _register


@pytest.fixture
async def alice(register):
    return await register("alice1234")


@pytest.fixture
async def bob(register):
    return await register("bob12345")


@pytest.fixture
async def carol(register):
    return await register("carol1234")
