"""Base model for records stored in MongoDB collections."""

from typing import Any, Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor

from docserver.utils import uuid7


class MongoModel(BaseModel):
    """Record keyed by a time-ordered UUID, stored as `_id` and exposed as `id`."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid7)

    model_config = ConfigDict(populate_by_name=True)

    def to_mongo(self) -> dict[str, Any]:
        data = self.model_dump()
        data["_id"] = data.pop("id")
        return data

    @classmethod
    def from_mongo(cls, doc: dict[str, Any] | None) -> Self | None:
        """Model for a raw document, None when the lookup found nothing."""
        if doc is None:
            return None
        return cls.model_validate(doc)

    @classmethod
    async def from_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        return [cls.model_validate(doc) async for doc in cursor]
