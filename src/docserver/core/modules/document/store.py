"""Durable document storage."""

from typing import Any, Protocol
from uuid import UUID

from pymongo.asynchronous.collection import AsyncCollection

from docserver.core.modules.document.models import Document


class DocumentStore(Protocol):
    """Document records. Lookups return None when nothing matches; storage failures raise."""

    async def create_indexes(self) -> None: ...

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def list_by_owner(self, owner_id: UUID, limit: int) -> list[Document]: ...

    async def list_shared(self, viewer_login: str, owner_id: UUID, limit: int) -> list[Document]: ...

    async def create(self, document: Document) -> None: ...

    async def delete(self, document_id: UUID) -> None: ...


class MongoDocumentStore:
    """DocumentStore backed by the `documents` collection."""

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def create_indexes(self) -> None:
        await self._collection.create_index([("owner", 1), ("name", 1), ("created", 1)])
        await self._collection.create_index([("grant", 1)])

    async def get_by_id(self, document_id: UUID) -> Document | None:
        return Document.from_mongo(await self._collection.find_one({"_id": document_id}))

    async def list_by_owner(self, owner_id: UUID, limit: int) -> list[Document]:
        """Documents owned by owner_id ordered by name, then creation time."""
        cursor = self._collection.find({"owner": owner_id}).sort([("name", 1), ("created", 1)]).limit(limit)
        return await Document.from_cursor(cursor)

    async def list_shared(self, viewer_login: str, owner_id: UUID, limit: int) -> list[Document]:
        """Documents of owner_id that are public or granted to viewer_login."""
        query = {"owner": owner_id, "$or": [{"public": True}, {"grant": viewer_login}]}
        cursor = self._collection.find(query).sort([("name", 1), ("created", 1)]).limit(limit)
        return await Document.from_cursor(cursor)

    async def create(self, document: Document) -> None:
        await self._collection.insert_one(document.to_mongo())

    async def delete(self, document_id: UUID) -> None:
        await self._collection.delete_one({"_id": document_id})
