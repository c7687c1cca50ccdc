from __future__ import annotations

from typing import Any, Iterable

from pymongo import DESCENDING

from localconnect.repositories.base import MongoRepository


class ReviewRepository(MongoRepository):
    collection_name = "reviews"
    duplicate_message = "You already reviewed this business"

    async def find_by_user_and_business(self, user_id: str, business_id: str) -> dict[str, Any] | None:
        return await self.collection.find_one({"user_id": user_id, "business_id": business_id})

    async def list_for_business(self, business_id: str) -> list[dict[str, Any]]:
        return (
            await self.collection.find({"business_id": business_id})
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .to_list(length=None)
        )

    async def ratings_for_business(self, business_id: str) -> list[int]:
        docs = await self.collection.find({"business_id": business_id}, {"rating": 1}).to_list(length=None)
        return [int(doc.get("rating", 0)) for doc in docs]

    async def rating_summaries(self, business_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
        ids = list(dict.fromkeys(business_ids))
        if not ids:
            return {}
        pipeline = [
            {"$match": {"business_id": {"$in": ids}}},
            {
                "$group": {
                    "_id": "$business_id",
                    "average_rating": {"$avg": "$rating"},
                    "review_count": {"$sum": 1},
                }
            },
        ]
        docs = await self.collection.aggregate(pipeline).to_list(length=None)
        return {
            str(doc["_id"]): {
                "average_rating": doc.get("average_rating"),
                "review_count": int(doc.get("review_count", 0)),
            }
            for doc in docs
        }
