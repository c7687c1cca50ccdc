from __future__ import annotations

import asyncio
from typing import Any

from localconnect.auth import Caller
from localconnect.config import settings
from localconnect.errors import ForbiddenError
from localconnect.services.base import BaseService


class AdminService(BaseService):
    async def get_analytics(self, caller: Caller) -> dict:
        if not caller.is_admin:
            raise ForbiddenError("Access denied, admin only")

        top_n = max(1, int(settings.analytics_top_n))
        (
            total_users,
            total_businesses,
            total_reviews,
            total_follows,
            most_followed,
            top_rated,
            recent_users,
            recent_businesses,
            recent_reviews,
        ) = await asyncio.gather(
            self.store.users.count(),
            self.store.businesses.count(),
            self.store.reviews.count(),
            self.store.follows.count(),
            self._most_followed_businesses(top_n),
            self.store.businesses.top_rated(top_n),
            self.store.users.recent(top_n),
            self.store.businesses.recent(top_n),
            self._recent_reviews(top_n),
        )

        payload = {
            "total_users": total_users,
            "total_businesses": total_businesses,
            "total_reviews": total_reviews,
            "total_follows": total_follows,
            "most_followed_businesses": most_followed,
            "top_rated_businesses": [
                {
                    "id": str(doc["_id"]),
                    "name": doc.get("name", ""),
                    "average_rating": float(doc.get("average_rating") or 0.0),
                    "num_reviews": int(doc.get("num_reviews") or 0),
                }
                for doc in top_rated
            ],
            "recent_users": [
                {
                    "id": str(doc["_id"]),
                    "name": doc.get("name", ""),
                    "email": doc.get("email", ""),
                    "role": doc.get("role"),
                    "created_at": doc.get("created_at"),
                }
                for doc in recent_users
            ],
            "recent_businesses": [
                {
                    "id": str(doc["_id"]),
                    "name": doc.get("name", ""),
                    "owner_id": doc.get("owner_id"),
                    "category": doc.get("category"),
                    "created_at": doc.get("created_at"),
                }
                for doc in recent_businesses
            ],
            "recent_reviews": recent_reviews,
        }
        return self._sanitize_response_payload(payload)

    async def _most_followed_businesses(self, limit: int) -> list[dict[str, Any]]:
        counts = await self.store.follows.most_followed(limit)
        businesses = await self.store.businesses.get_many(item["business_id"] for item in counts)
        return [
            {
                "business_id": item["business_id"],
                "name": businesses[item["business_id"]].get("name", ""),
                "followers": item["followers"],
            }
            for item in counts
            if item["business_id"] in businesses
        ]

    async def _recent_reviews(self, limit: int) -> list[dict[str, Any]]:
        review_docs = await self.store.reviews.recent(limit)
        users, businesses = await asyncio.gather(
            self.store.users.get_many(doc.get("user_id") for doc in review_docs),
            self.store.businesses.get_many(doc.get("business_id") for doc in review_docs),
        )
        items = []
        for doc in review_docs:
            business_doc = businesses.get(str(doc.get("business_id")))
            items.append(
                {
                    "id": str(doc["_id"]),
                    "rating": doc.get("rating"),
                    "comment": doc.get("comment", ""),
                    "created_at": doc.get("created_at"),
                    "user": self._user_summary(users.get(str(doc.get("user_id")))),
                    "business": (
                        {"id": str(business_doc["_id"]), "name": business_doc.get("name", "")}
                        if business_doc is not None
                        else None
                    ),
                }
            )
        return items
