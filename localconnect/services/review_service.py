from __future__ import annotations

import logging
from typing import Any, Iterable

from localconnect.auth import Caller
from localconnect.config import settings
from localconnect.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from localconnect.models.review import Review
from localconnect.repositories.store import Store
from localconnect.services.base import BaseService

LOGGER = logging.getLogger(__name__)


def fold_ratings(ratings: Iterable[int | float]) -> tuple[float, int]:
    """Return ``(average_rating, num_reviews)``; the average is 0 with no reviews."""
    values = [float(rating) for rating in ratings]
    count = len(values)
    if count == 0:
        return 0.0, 0
    return sum(values) / count, count


class ReviewService(BaseService):
    """Review writes plus maintenance of the business rating aggregate.

    The aggregate is always recomputed from the full review set of the
    business. In ``optimistic`` mode the write is a compare-and-set on the
    business ``rating_version``: a writer whose snapshot was overtaken by a
    concurrent recomputation re-reads and tries again, so the last stored
    aggregate always reflects a review set read after the competing write.
    In ``unguarded`` mode the write is unconditional and two concurrent
    submissions may leave a stale aggregate until the next review change.
    """

    def __init__(self, store: Store, consistency: str | None = None) -> None:
        super().__init__(store)
        self.consistency = consistency or settings.rating_consistency

    async def submit_review(self, caller: Caller, business_id: str, rating: int, comment: str = "") -> dict:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        if not await self.store.businesses.exists(parsed_business_id):
            raise NotFoundError("Business not found")

        existing = await self.store.reviews.find_by_user_and_business(caller.id, parsed_business_id)
        if existing is not None:
            raise ConflictError("You already reviewed this business")

        review = Review(
            user_id=caller.id,
            business_id=parsed_business_id,
            rating=self._validate_rating(rating),
            comment=comment or "",
        )
        review_doc = await self.store.reviews.insert(review.model_dump(mode="python", exclude={"id"}))
        await self.recompute_business_rating(parsed_business_id)

        LOGGER.info("Review submitted review_id=%s business_id=%s", review_doc["_id"], parsed_business_id)
        return self._sanitize_response_payload(self._serialize_doc(review_doc))

    async def list_reviews(self, business_id: str) -> list[dict]:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        review_docs = await self.store.reviews.list_for_business(parsed_business_id)
        authors = await self.store.users.get_many(doc.get("user_id") for doc in review_docs)

        items = []
        for doc in review_docs:
            item = self._serialize_doc(doc)
            item["user"] = self._user_summary(authors.get(str(doc.get("user_id"))))
            items.append(item)
        return self._sanitize_response_payload(items)

    async def update_review(
        self,
        review_id: str,
        caller: Caller,
        *,
        rating: int | None = None,
        comment: str | None = None,
    ) -> dict:
        parsed_review_id = self._parse_object_id(review_id, field_name="review_id")
        review_doc = await self.store.reviews.get(parsed_review_id)
        if review_doc is None:
            raise NotFoundError("Review not found")
        if str(review_doc.get("user_id")) != caller.id:
            raise ForbiddenError("Not authorized to update this review")

        fields: dict[str, Any] = {}
        if rating is not None:
            fields["rating"] = self._validate_rating(rating)
        if comment is not None:
            fields["comment"] = comment

        updated = review_doc
        if fields:
            updated = await self.store.reviews.update_fields(parsed_review_id, fields)
            if updated is None:
                raise NotFoundError("Review not found")
        await self.recompute_business_rating(str(review_doc.get("business_id")))
        return self._sanitize_response_payload(self._serialize_doc(updated))

    async def delete_review(self, review_id: str, caller: Caller) -> dict:
        parsed_review_id = self._parse_object_id(review_id, field_name="review_id")
        review_doc = await self.store.reviews.get(parsed_review_id)
        if review_doc is None:
            raise NotFoundError("Review not found")
        if str(review_doc.get("user_id")) != caller.id and not caller.is_admin:
            raise ForbiddenError("Not authorized to delete this review")

        await self.store.reviews.delete(parsed_review_id)
        business_id = str(review_doc.get("business_id"))
        await self.recompute_business_rating(business_id)

        LOGGER.info("Review deleted review_id=%s business_id=%s by=%s", parsed_review_id, business_id, caller.id)
        return {"message": "Review removed"}

    async def recompute_business_rating(self, business_id: str) -> tuple[float, int] | None:
        """Rebuild ``average_rating``/``num_reviews`` from every review of the business.

        Returns the stored aggregate, or None when the business no longer exists.
        """
        if self.consistency == "unguarded":
            if not await self.store.businesses.exists(business_id):
                return None
            average_rating, num_reviews = fold_ratings(await self.store.reviews.ratings_for_business(business_id))
            await self.store.businesses.set_rating_aggregate(
                business_id,
                average_rating=average_rating,
                num_reviews=num_reviews,
            )
            return average_rating, num_reviews

        max_attempts = max(1, int(settings.rating_recompute_max_attempts))
        for attempt in range(1, max_attempts + 1):
            business_doc = await self.store.businesses.get(business_id)
            if business_doc is None:
                return None
            version = int(business_doc.get("rating_version") or 0)
            # The version must be read before the reviews for the compare-and-set to be meaningful.
            average_rating, num_reviews = fold_ratings(await self.store.reviews.ratings_for_business(business_id))
            stored = await self.store.businesses.set_rating_aggregate(
                business_id,
                average_rating=average_rating,
                num_reviews=num_reviews,
                expected_version=version,
            )
            if stored:
                return average_rating, num_reviews
            LOGGER.info(
                "Rating aggregate changed concurrently business_id=%s attempt=%s/%s",
                business_id,
                attempt,
                max_attempts,
            )

        LOGGER.warning(
            "Rating recompute attempts exhausted business_id=%s; writing latest snapshot unconditionally",
            business_id,
        )
        average_rating, num_reviews = fold_ratings(await self.store.reviews.ratings_for_business(business_id))
        await self.store.businesses.set_rating_aggregate(
            business_id,
            average_rating=average_rating,
            num_reviews=num_reviews,
        )
        return average_rating, num_reviews

    def _validate_rating(self, rating: Any) -> int:
        if isinstance(rating, bool):
            raise BadRequestError("rating must be an integer between 1 and 5")
        try:
            value = int(rating)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("rating must be an integer between 1 and 5") from exc
        if value != rating or not 1 <= value <= 5:
            raise BadRequestError("rating must be an integer between 1 and 5")
        return value
