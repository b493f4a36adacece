from uuid import UUID

import pydantic
import structlog

from docserver.core.cache import ExpiringCache
from docserver.core.core import CachedValue, Service
from docserver.core.modules.document.models import Document, DocumentList, DocumentMeta, UploadedFile
from docserver.core.modules.document.storage import (
    DEFAULT_JSON_MIME,
    guess_mime,
    remove_document_file,
    write_document_file,
)
from docserver.core.modules.document.store import DocumentStore
from docserver.core.modules.user.models import User
from docserver.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


def document_key(document_id: UUID) -> str:
    return f"doc_{document_id}"


def documents_key(owner_id: UUID) -> str:
    return f"docs_{owner_id}"


class DocumentService(Service):
    """Stores documents and serves them through the shared cache.

    Access rules are checked on every read, whether the document came from
    the cache or from the store.
    """

    @property
    def store(self) -> DocumentStore:
        return self.core.stores.documents

    @property
    def _cache(self) -> ExpiringCache[CachedValue]:
        return self.core.cache

    async def on_start(self) -> None:
        """Create document indexes."""
        await self.store.create_indexes()

    async def upload_document(self, user: User, meta: str, upload: UploadedFile | None) -> Document:
        """Create a document owned by user from JSON metadata and an optional file.

        Args:
            user: Authenticated owner
            meta: JSON object with name, public, mime, grant and json keys
            upload: File content, None for JSON documents

        Raises:
            ValidationError: If metadata is malformed or a grantee does not exist
        """
        try:
            parsed = DocumentMeta.model_validate_json(meta)
        except pydantic.ValidationError as e:
            raise ValidationError("Invalid document metadata") from e

        grant = list(dict.fromkeys(parsed.grant))
        for login in grant:
            if await self.core.stores.users.get_by_login(login) is None:
                raise ValidationError(f"User '{login}' not found")

        document = Document(
            name=parsed.name,
            mime=parsed.mime,
            file=upload is not None,
            public=parsed.public,
            grant=grant,
            owner=user.id,
            json_data=parsed.json_data,
        )

        if upload is not None:
            if not document.mime:
                document.mime = guess_mime(upload.filename)
            file_path = write_document_file(self.core.config.upload_dir, document.id, upload.filename, upload.content)
            document.file_path = str(file_path)
        elif not document.mime:
            document.mime = DEFAULT_JSON_MIME

        try:
            await self.store.create(document)
        except Exception:
            if document.file_path is not None:
                remove_document_file(document.file_path)
            raise

        self._cache.delete(documents_key(user.id))
        logger.info("document_uploaded", document_id=document.id, owner=user.id, file=document.file)
        return document

    async def list_documents(self, user: User, login: str | None, limit: int) -> list[Document]:
        """List the user's own documents, or another user's documents the user may read."""
        if limit < 1:
            raise ValidationError("Limit must be a positive integer")

        if login and login != user.login:
            owner = await self.core.services.user.get_user_by_login(login)
            return await self.store.list_shared(user.login, owner.id, limit)

        cached = self._cache.get(documents_key(user.id))
        if isinstance(cached, DocumentList):
            page = cached.page(limit)
            if page is not None:
                return page

        documents = await self.store.list_by_owner(user.id, limit)
        listing = DocumentList(limit=limit, items=documents)
        self._cache.set(documents_key(user.id), listing, self.core.config.document_list_cache_ttl)
        return documents

    async def get_document(self, user: User, document_id: UUID) -> Document:
        """Get a document the user may read.

        Raises:
            NotFoundError: If the document does not exist
            AccessDeniedError: If the user is neither owner nor grantee and the document is private
        """
        document = await self._load(document_id)
        self.core.services.access.ensure_can_read(user, document)
        return document

    async def delete_document(self, user: User, document_id: UUID) -> None:
        """Delete a document owned by user, including its stored file."""
        document = await self.store.get_by_id(document_id)
        if document is None:
            raise NotFoundError(f"Document '{document_id}' not found")
        self.core.services.access.ensure_can_delete(user, document)

        if document.file and document.file_path:
            if not remove_document_file(document.file_path):
                logger.warning("document_file_missing", document_id=document_id, file_path=document.file_path)

        await self.store.delete(document_id)
        self._cache.delete(document_key(document_id))
        self._cache.delete(documents_key(document.owner))
        logger.info("document_deleted", document_id=document_id, owner=document.owner)

    async def _load(self, document_id: UUID) -> Document:
        cached = self._cache.get(document_key(document_id))
        if isinstance(cached, Document):
            return cached

        document = await self.store.get_by_id(document_id)
        if document is None:
            raise NotFoundError(f"Document '{document_id}' not found")
        self._cache.set(document_key(document_id), document, self.core.config.document_cache_ttl)
        return document
