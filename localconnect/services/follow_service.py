from __future__ import annotations

import logging

from localconnect.auth import Caller
from localconnect.errors import ConflictError, NotFoundError
from localconnect.models.follow import Follow
from localconnect.services.base import BaseService

LOGGER = logging.getLogger(__name__)


class FollowService(BaseService):
    async def follow_business(self, caller: Caller, business_id: str) -> dict:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        if not await self.store.businesses.exists(parsed_business_id):
            raise NotFoundError("Business not found")

        existing = await self.store.follows.find_by_user_and_business(caller.id, parsed_business_id)
        if existing is not None:
            raise ConflictError("Already following this business")

        follow = Follow(user_id=caller.id, business_id=parsed_business_id)
        # The unique (user_id, business_id) index turns a racing duplicate into ConflictError.
        follow_doc = await self.store.follows.insert(follow.model_dump(mode="python", exclude={"id"}))
        LOGGER.info("Follow created user_id=%s business_id=%s", caller.id, parsed_business_id)
        return self._sanitize_response_payload(self._serialize_doc(follow_doc))

    async def unfollow_business(self, caller: Caller, business_id: str) -> dict:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        deleted = await self.store.follows.delete_pair(caller.id, parsed_business_id)
        if not deleted:
            raise NotFoundError("Not following this business")

        LOGGER.info("Follow removed user_id=%s business_id=%s", caller.id, parsed_business_id)
        return {"message": "Business unfollowed successfully"}

    async def list_followed_businesses(self, caller: Caller) -> list[dict]:
        follow_docs = await self.store.follows.list_for_user(caller.id)
        businesses = await self.store.businesses.get_many(doc.get("business_id") for doc in follow_docs)

        items = []
        for doc in follow_docs:
            business_doc = businesses.get(str(doc.get("business_id")))
            if business_doc is None:
                # Follow left behind by a deleted business.
                continue
            item = self._serialize_doc(business_doc)
            item.pop("rating_version", None)
            item["followed_at"] = doc.get("created_at")
            items.append(item)
        return self._sanitize_response_payload(items)

    async def list_followers(self, business_id: str, caller: Caller) -> list[dict]:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        business_doc = await self.store.businesses.get(parsed_business_id)
        if business_doc is None:
            raise NotFoundError("Business not found")
        self._require_owner_or_admin(
            caller,
            business_doc.get("owner_id"),
            "Only the business owner or an admin can list followers",
        )

        follow_docs = await self.store.follows.list_for_business(parsed_business_id)
        users = await self.store.users.get_many(doc.get("user_id") for doc in follow_docs)

        items = []
        for doc in follow_docs:
            user_summary = self._user_summary(users.get(str(doc.get("user_id"))))
            if user_summary is None:
                continue
            items.append(
                {
                    "id": str(doc["_id"]),
                    "user": user_summary,
                    "created_at": doc.get("created_at"),
                }
            )
        return self._sanitize_response_payload(items)
