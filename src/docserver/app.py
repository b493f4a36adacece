from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from docserver.config import Config
from docserver.core.core import Core, Stores
from docserver.core.modules.document.models import Document, UploadedFile
from docserver.core.modules.session.models import AuthToken
from docserver.core.modules.user.models import User, UserView


class App:
    """Facade for all application operations; document operations require a validated user."""

    def __init__(self, config: Config, stores: Stores | None = None) -> None:
        self._core = Core(config, stores)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def register(self, admin_token: str, login: str, password: str) -> UserView:
        """Create a new user (requires the administrative token)."""
        user = await self._core.services.user.register(admin_token, login, password)
        return UserView.from_domain(user)

    async def authenticate(self, login: str, password: str) -> AuthToken:
        """Authenticate user and create session."""
        return await self._core.services.session.authenticate(login, password)

    async def validate_token(self, auth_token: AuthToken) -> User:
        """Resolve a bearer token to the authenticated user."""
        return await self._core.services.access.ensure_authenticated(auth_token)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate user session."""
        await self._core.services.session.logout(auth_token)

    async def upload_document(self, current_user: User, meta: str, upload: UploadedFile | None) -> Document:
        """Upload a file or JSON document owned by the current user."""
        return await self._core.services.document.upload_document(current_user, meta, upload)

    async def list_documents(self, current_user: User, login: str | None, limit: int | None) -> list[Document]:
        """List own documents, or documents of another user visible to the current user."""
        if limit is None:
            limit = self._core.config.document_list_limit
        return await self._core.services.document.list_documents(current_user, login, limit)

    async def get_document(self, current_user: User, document_id: UUID) -> Document:
        """Get a document the current user may read."""
        return await self._core.services.document.get_document(current_user, document_id)

    async def delete_document(self, current_user: User, document_id: UUID) -> None:
        """Delete a document owned by the current user."""
        await self._core.services.document.delete_document(current_user, document_id)
