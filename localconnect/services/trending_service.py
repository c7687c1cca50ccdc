from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from localconnect.config import settings
from localconnect.errors import BadRequestError
from localconnect.services.base import BaseService


class TrendingService(BaseService):
    async def get_trending(
        self,
        window_days: int | None = None,
        limit: int | None = None,
        *,
        now: datetime | None = None,
    ) -> list[dict]:
        """Rank businesses by visits inside the trailing window.

        A visit counts when ``created_at >= now - window_days``. Equal visit
        counts are ordered by business id. Businesses deleted after being
        visited are dropped, so fewer than ``limit`` entries may come back.
        """
        window_value = self._coerce_positive_int(
            settings.trending_window_days if window_days is None else window_days,
            field_name="window_days",
        )
        limit_value = self._coerce_positive_int(
            settings.trending_limit if limit is None else limit,
            field_name="limit",
        )
        limit_value = min(limit_value, settings.trending_max_limit)

        since = (now or self._now()) - timedelta(days=window_value)
        counts = await self.store.visits.visit_counts_since(since, limit_value)
        business_ids = [item["business_id"] for item in counts]

        businesses = await self.store.businesses.get_many(business_ids)
        rating_summaries = await self.store.reviews.rating_summaries(business_ids)

        items: list[dict[str, Any]] = []
        for entry in counts:
            business_doc = businesses.get(entry["business_id"])
            if business_doc is None:
                continue
            summary = rating_summaries.get(entry["business_id"], {})
            review_count = int(summary.get("review_count", 0))
            items.append(
                {
                    "business_id": entry["business_id"],
                    "name": business_doc.get("name", ""),
                    "category": business_doc.get("category"),
                    "location": business_doc.get("location"),
                    "images": business_doc.get("images", []),
                    "visit_count": entry["visit_count"],
                    "average_rating": summary.get("average_rating") if review_count else None,
                    "review_count": review_count,
                }
            )
        return self._sanitize_response_payload(items)

    def _coerce_positive_int(self, value: Any, *, field_name: str) -> int:
        try:
            parsed = int(value)
        except (TypeError, ValueError) as exc:
            raise BadRequestError(f"Invalid {field_name}. It must be an integer >= 1.") from exc
        if parsed < 1:
            raise BadRequestError(f"Invalid {field_name}. It must be >= 1.")
        return parsed
