from __future__ import annotations

from typing import Any

from pymongo import ASCENDING

from localconnect.repositories.base import MongoRepository


class CategoryRepository(MongoRepository):
    collection_name = "categories"
    duplicate_message = "Category already exists"

    async def find_by_name(self, name: str) -> dict[str, Any] | None:
        return await self.collection.find_one({"name": name})

    async def list_sorted(self) -> list[dict[str, Any]]:
        return await self.collection.find({}).sort([("name", ASCENDING)]).to_list(length=None)
