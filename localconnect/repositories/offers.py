from __future__ import annotations

from datetime import datetime
from typing import Any

from pymongo import DESCENDING

from localconnect.repositories.base import MongoRepository


class OfferRepository(MongoRepository):
    collection_name = "offers"

    async def list_for_business(self, business_id: str, *, is_active: bool | None = None) -> list[dict[str, Any]]:
        query: dict[str, Any] = {"business_id": business_id}
        if is_active is not None:
            query["is_active"] = is_active
        return (
            await self.collection.find(query)
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .to_list(length=None)
        )

    async def list_all(self, *, active_at: datetime | None = None) -> list[dict[str, Any]]:
        query: dict[str, Any] = {}
        if active_at is not None:
            query = {
                "is_active": True,
                "valid_from": {"$lte": active_at},
                "valid_to": {"$gte": active_at},
            }
        return (
            await self.collection.find(query)
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .to_list(length=None)
        )
