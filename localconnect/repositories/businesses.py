from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pymongo import ASCENDING, DESCENDING

from localconnect.repositories.base import MongoRepository, to_object_id


class BusinessRepository(MongoRepository):
    collection_name = "businesses"
    duplicate_message = "Business already exists"

    async def list_all(self, *, skip: int = 0, limit: int | None = None) -> list[dict[str, Any]]:
        cursor = self.collection.find({}).sort([("_id", ASCENDING)])
        if skip:
            cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=limit)

    async def find_within_sphere(self, *, lng: float, lat: float, radians: float) -> list[dict[str, Any]]:
        query = {
            "location": {
                "$geoWithin": {
                    "$centerSphere": [[lng, lat], radians],
                }
            }
        }
        return await self.collection.find(query).to_list(length=None)

    async def top_rated(self, limit: int) -> list[dict[str, Any]]:
        return (
            await self.collection.find({})
            .sort([("average_rating", DESCENDING), ("_id", ASCENDING)])
            .limit(limit)
            .to_list(length=limit)
        )

    async def set_rating_aggregate(
        self,
        business_id: str,
        *,
        average_rating: float,
        num_reviews: int,
        expected_version: int | None = None,
    ) -> bool:
        """Persist the derived rating fields.

        With ``expected_version`` the write only lands if nobody else has
        recomputed the aggregate since that version was read.
        """
        object_id = to_object_id(business_id)
        if object_id is None:
            return False

        query: dict[str, Any] = {"_id": object_id}
        if expected_version is not None:
            # Documents written before versioning have no rating_version field.
            query["rating_version"] = {"$in": [expected_version, None]} if expected_version == 0 else expected_version

        result = await self.collection.update_one(
            query,
            {
                "$set": {
                    "average_rating": average_rating,
                    "num_reviews": num_reviews,
                    "updated_at": datetime.now(timezone.utc),
                },
                "$inc": {"rating_version": 1},
            },
        )
        return result.matched_count == 1
