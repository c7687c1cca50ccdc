from __future__ import annotations

from typing import Any, Iterable

from pymongo import ASCENDING, DESCENDING

from localconnect.repositories.base import MongoRepository


class FollowRepository(MongoRepository):
    collection_name = "follows"
    duplicate_message = "Already following this business"

    async def find_by_user_and_business(self, user_id: str, business_id: str) -> dict[str, Any] | None:
        return await self.collection.find_one({"user_id": user_id, "business_id": business_id})

    async def delete_pair(self, user_id: str, business_id: str) -> bool:
        deleted = await self.collection.find_one_and_delete({"user_id": user_id, "business_id": business_id})
        return deleted is not None

    async def followed_business_ids(self, user_id: str, business_ids: Iterable[str]) -> set[str]:
        ids = list(dict.fromkeys(business_ids))
        if not ids:
            return set()
        docs = await self.collection.find(
            {"user_id": user_id, "business_id": {"$in": ids}},
            {"business_id": 1},
        ).to_list(length=len(ids))
        return {str(doc["business_id"]) for doc in docs}

    async def follower_counts(self, business_ids: Iterable[str]) -> dict[str, int]:
        ids = list(dict.fromkeys(business_ids))
        if not ids:
            return {}
        pipeline = [
            {"$match": {"business_id": {"$in": ids}}},
            {"$group": {"_id": "$business_id", "followers": {"$sum": 1}}},
        ]
        docs = await self.collection.aggregate(pipeline).to_list(length=None)
        return {str(doc["_id"]): int(doc["followers"]) for doc in docs}

    async def most_followed(self, limit: int) -> list[dict[str, Any]]:
        pipeline = [
            {"$group": {"_id": "$business_id", "followers": {"$sum": 1}}},
            {"$sort": {"followers": -1, "_id": 1}},
            {"$limit": limit},
        ]
        docs = await self.collection.aggregate(pipeline).to_list(length=limit)
        return [{"business_id": str(doc["_id"]), "followers": int(doc["followers"])} for doc in docs]

    async def list_for_user(self, user_id: str) -> list[dict[str, Any]]:
        return (
            await self.collection.find({"user_id": user_id})
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .to_list(length=None)
        )

    async def list_for_business(self, business_id: str) -> list[dict[str, Any]]:
        return (
            await self.collection.find({"business_id": business_id})
            .sort([("created_at", ASCENDING), ("_id", ASCENDING)])
            .to_list(length=None)
        )
