from __future__ import annotations

from datetime import datetime
from typing import Any

from localconnect.repositories.base import MongoRepository


class VisitRepository(MongoRepository):
    collection_name = "visits"

    async def visit_counts_since(self, since: datetime, limit: int) -> list[dict[str, Any]]:
        """Top ``limit`` businesses by visits with ``created_at >= since``."""
        pipeline = [
            {"$match": {"created_at": {"$gte": since}}},
            {"$group": {"_id": "$business_id", "visit_count": {"$sum": 1}}},
            {"$sort": {"visit_count": -1, "_id": 1}},
            {"$limit": limit},
        ]
        docs = await self.collection.aggregate(pipeline).to_list(length=limit)
        return [{"business_id": str(doc["_id"]), "visit_count": int(doc["visit_count"])} for doc in docs]
