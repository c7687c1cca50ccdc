from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from localconnect.errors import ConflictError


def to_object_id(value: Any) -> ObjectId | None:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def to_object_ids(values: Iterable[Any]) -> list[ObjectId]:
    object_ids: list[ObjectId] = []
    for value in values:
        object_id = to_object_id(value)
        if object_id is not None and object_id not in object_ids:
            object_ids.append(object_id)
    return object_ids


class MongoRepository:
    """Collection-scoped document access shared by every entity repository.

    Documents are plain dicts keyed by ``_id`` (an ObjectId); references to
    other entities are stored as ObjectId strings.
    """

    collection_name = ""
    duplicate_message = "Document already exists"

    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self.collection = database[self.collection_name]

    async def insert(self, document: dict[str, Any]) -> dict[str, Any]:
        payload = dict(document)
        payload.pop("id", None)
        try:
            result = await self.collection.insert_one(payload)
        except DuplicateKeyError as exc:
            raise ConflictError(self.duplicate_message) from exc
        payload["_id"] = result.inserted_id
        return payload

    async def get(self, document_id: str) -> dict[str, Any] | None:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return await self.collection.find_one({"_id": object_id})

    async def get_many(self, document_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
        object_ids = to_object_ids(document_ids)
        if not object_ids:
            return {}
        docs = await self.collection.find({"_id": {"$in": object_ids}}).to_list(length=len(object_ids))
        return {str(doc["_id"]): doc for doc in docs}

    async def exists(self, document_id: str) -> bool:
        object_id = to_object_id(document_id)
        if object_id is None:
            return False
        return await self.collection.count_documents({"_id": object_id}, limit=1) > 0

    async def update_fields(self, document_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        update = dict(fields)
        update["updated_at"] = datetime.now(timezone.utc)
        try:
            return await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise ConflictError(self.duplicate_message) from exc

    async def delete(self, document_id: str) -> bool:
        object_id = to_object_id(document_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count == 1

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def recent(self, limit: int) -> list[dict[str, Any]]:
        return (
            await self.collection.find({})
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
            .to_list(length=limit)
        )
