from __future__ import annotations

import logging
import math
from typing import Any

from localconnect.auth import Caller
from localconnect.config import settings
from localconnect.errors import BadRequestError, ForbiddenError, NotFoundError
from localconnect.geo import haversine_km, km_to_radians, point_coordinates
from localconnect.models.business import Business, BusinessCreate, BusinessUpdate
from localconnect.models.user import UserRole
from localconnect.services.base import BaseService

LOGGER = logging.getLogger(__name__)


class BusinessService(BaseService):
    _CREATOR_ROLES = {UserRole.BUSINESS_OWNER.value, UserRole.ADMIN.value}
    _ADMIN_ONLY_FIELDS = {"is_verified", "is_featured"}
    _DEFAULT_PAGE_SIZE = 20
    _MAX_PAGE_SIZE = 100

    async def list_businesses(
        self,
        caller: Caller | None = None,
        *,
        page: int | None = None,
        page_size: int | None = None,
    ) -> list[dict]:
        # With neither page nor page_size every business is returned, as the mobile client expects.
        if page is None and page_size is None:
            business_docs = await self.store.businesses.list_all()
        else:
            page_value, page_size_value = self._coerce_pagination(
                page=1 if page is None else page,
                page_size=self._DEFAULT_PAGE_SIZE if page_size is None else page_size,
                max_page_size=self._MAX_PAGE_SIZE,
            )
            business_docs = await self.store.businesses.list_all(
                skip=(page_value - 1) * page_size_value,
                limit=page_size_value,
            )

        items = await self.annotate_follow_state(business_docs, caller)
        items = await self._attach_owners(items)
        return self._sanitize_response_payload(items)

    async def get_business(self, business_id: str, caller: Caller | None = None) -> dict:
        parsed_id = self._parse_object_id(business_id, field_name="business_id")
        business_doc = await self.store.businesses.get(parsed_id)
        if business_doc is None:
            raise NotFoundError("Business not found")

        items = await self.annotate_follow_state([business_doc], caller)
        items = await self._attach_owners(items)
        return self._sanitize_response_payload(items[0])

    async def find_nearby(
        self,
        lng: Any,
        lat: Any,
        radius_km: Any = None,
        caller: Caller | None = None,
    ) -> list[dict]:
        longitude, latitude = self._parse_center(lng, lat)
        distance = self._parse_radius(radius_km)

        business_docs = await self.store.businesses.find_within_sphere(
            lng=longitude,
            lat=latitude,
            radians=km_to_radians(distance),
        )
        items = await self.annotate_follow_state(business_docs, caller)
        for item in items:
            coordinates = point_coordinates(item.get("location"))
            item["distance_km"] = (
                round(haversine_km(longitude, latitude, coordinates[0], coordinates[1]), 3)
                if coordinates is not None
                else None
            )
        return self._sanitize_response_payload(items)

    async def annotate_follow_state(
        self,
        business_docs: list[dict[str, Any]],
        caller: Caller | None,
    ) -> list[dict[str, Any]]:
        """Serialize businesses and add ``is_followed`` / ``followers_count``.

        Anonymous callers always get ``is_followed`` False. Two storage
        round-trips regardless of how many businesses are passed in.
        """
        items = [self._serialize_business_doc(doc) for doc in business_docs]
        if not items:
            return items

        business_ids = [item["id"] for item in items]
        follower_counts = await self.store.follows.follower_counts(business_ids)
        followed_ids: set[str] = set()
        if caller is not None:
            followed_ids = await self.store.follows.followed_business_ids(caller.id, business_ids)

        for item in items:
            item["is_followed"] = item["id"] in followed_ids
            item["followers_count"] = follower_counts.get(item["id"], 0)
        return items

    async def create_business(self, caller: Caller, payload: BusinessCreate) -> dict:
        if caller.role not in self._CREATOR_ROLES:
            raise ForbiddenError("Only business owners can create businesses")

        business = Business(owner_id=caller.id, **payload.model_dump(mode="python"))
        business_doc = await self.store.businesses.insert(business.model_dump(mode="python", exclude={"id"}))
        LOGGER.info("Business created business_id=%s owner_id=%s", business_doc["_id"], caller.id)
        return self._sanitize_response_payload(self._serialize_business_doc(business_doc))

    async def update_business(self, business_id: str, caller: Caller, payload: BusinessUpdate) -> dict:
        parsed_id = self._parse_object_id(business_id, field_name="business_id")
        existing = await self.store.businesses.get(parsed_id)
        if existing is None:
            raise NotFoundError("Business not found")
        self._require_owner_or_admin(caller, existing.get("owner_id"), "Not authorized to update this business")

        fields = payload.model_dump(mode="python", exclude_unset=True)
        if not caller.is_admin and self._ADMIN_ONLY_FIELDS.intersection(fields):
            raise ForbiddenError("Only admins can change verification or featured status")
        for key in ("name", "category", "location"):
            if key in fields and fields[key] is None:
                raise BadRequestError(f"'{key}' cannot be null.")
        if not fields:
            return self._sanitize_response_payload(self._serialize_business_doc(existing))

        updated = await self.store.businesses.update_fields(parsed_id, fields)
        if updated is None:
            raise NotFoundError("Business not found")
        return self._sanitize_response_payload(self._serialize_business_doc(updated))

    async def delete_business(self, business_id: str, caller: Caller) -> dict:
        parsed_id = self._parse_object_id(business_id, field_name="business_id")
        existing = await self.store.businesses.get(parsed_id)
        if existing is None:
            raise NotFoundError("Business not found")
        self._require_owner_or_admin(caller, existing.get("owner_id"), "Not authorized to delete this business")

        await self.store.businesses.delete(parsed_id)
        LOGGER.info("Business deleted business_id=%s by=%s", parsed_id, caller.id)
        return {"message": "Business removed"}

    async def _attach_owners(self, items: list[dict[str, Any]]) -> list[dict[str, Any]]:
        owners = await self.store.users.get_many(item.get("owner_id") for item in items)
        for item in items:
            item["owner"] = self._user_summary(owners.get(str(item.get("owner_id"))))
        return items

    def _parse_center(self, lng: Any, lat: Any) -> tuple[float, float]:
        if lng in (None, "") or lat in (None, ""):
            raise BadRequestError("Please provide lng and lat")
        try:
            longitude = float(lng)
            latitude = float(lat)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("lng and lat must be numbers") from exc

        if not -180.0 <= longitude <= 180.0 or not -90.0 <= latitude <= 90.0:
            raise BadRequestError("lng must be within [-180, 180] and lat within [-90, 90]")
        return longitude, latitude

    def _parse_radius(self, radius_km: Any) -> float:
        if radius_km in (None, ""):
            return float(settings.nearby_default_radius_km)
        try:
            distance = float(radius_km)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("radius must be a number of kilometres") from exc
        if not math.isfinite(distance) or distance <= 0:
            raise BadRequestError("radius must be greater than 0")
        return distance

    def _serialize_business_doc(self, business_doc: dict[str, Any]) -> dict[str, Any]:
        payload = self._serialize_doc(business_doc)
        payload.pop("rating_version", None)
        payload["average_rating"] = float(payload.get("average_rating") or 0.0)
        payload["num_reviews"] = int(payload.get("num_reviews") or 0)
        return payload
