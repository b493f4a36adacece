from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from docserver.core.db import MongoModel
from docserver.utils import now


class Document(MongoModel):
    """Uploaded file or JSON blob owned by a user."""

    name: str
    mime: str
    file: bool  # True when the content lives on disk at file_path
    public: bool = False
    created: datetime = Field(default_factory=now)
    grant: list[str] = []  # Logins allowed to read besides the owner
    owner: UUID
    file_path: str | None = None
    json_data: Any = None


class DocumentList(BaseModel):
    """Cached listing of a user's own documents, fetched with the given limit."""

    limit: int
    items: list[Document]

    def page(self, limit: int) -> list[Document] | None:
        """Items for a request with limit, or None if this listing cannot answer it."""
        if limit > self.limit and len(self.items) == self.limit:
            return None
        return self.items[:limit]


class DocumentMeta(BaseModel):
    """Upload metadata sent alongside the optional file."""

    name: str = Field(..., min_length=1, description="Document name")
    public: bool = Field(False, description="Readable by every authenticated user")
    mime: str = Field("", description="MIME type, guessed from the file name when empty")
    grant: list[str] = Field([], description="Logins allowed to read the document")
    json_data: Any = Field(None, alias="json", description="JSON content for documents without a file")

    model_config = ConfigDict(populate_by_name=True)


class UploadedFile(BaseModel):
    """File received from the client."""

    filename: str
    content: bytes


class DocumentView(BaseModel):
    """Document metadata (API representation)."""

    id: UUID = Field(..., description="Document ID")
    name: str = Field(..., description="Document name")
    mime: str = Field(..., description="MIME type")
    file: bool = Field(..., description="Whether the document is a file")
    public: bool = Field(..., description="Whether every user may read the document")
    created: datetime = Field(..., description="Upload time")
    grant: list[str] = Field(..., description="Logins allowed to read the document")

    @classmethod
    def from_domain(cls, document: Document) -> "DocumentView":
        """Create view model from domain model."""
        return cls(
            id=document.id,
            name=document.name,
            mime=document.mime,
            file=document.file,
            public=document.public,
            created=document.created,
            grant=document.grant,
        )
