from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from localconnect.auth import Caller
from localconnect.errors import BadRequestError, NotFoundError
from localconnect.models.offer import Offer, OfferCreate, OfferUpdate
from localconnect.services.base import BaseService

LOGGER = logging.getLogger(__name__)


def is_offer_active(offer_doc: dict[str, Any], now: datetime) -> bool:
    """An offer is live when flagged active and ``valid_from <= now <= valid_to``."""
    if not offer_doc.get("is_active", False):
        return False
    valid_from = _as_utc(offer_doc.get("valid_from"))
    valid_to = _as_utc(offer_doc.get("valid_to"))
    if valid_from is None or valid_to is None:
        return False
    return valid_from <= _as_utc(now) <= valid_to


def _as_utc(value: Any) -> datetime | None:
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OfferService(BaseService):
    _BUSINESS_SUMMARY_FIELDS = (
        "name",
        "category",
        "images",
        "contact",
        "location",
        "average_rating",
        "num_reviews",
    )

    async def create_offer(self, business_id: str, caller: Caller, payload: OfferCreate) -> dict:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        business_doc = await self.store.businesses.get(parsed_business_id)
        if business_doc is None:
            raise NotFoundError("Business not found")
        self._require_owner_or_admin(caller, business_doc.get("owner_id"), "Not authorized to create offer")

        offer = Offer(business_id=parsed_business_id, **payload.model_dump(mode="python"))
        offer_doc = await self.store.offers.insert(offer.model_dump(mode="python", exclude={"id"}))
        LOGGER.info("Offer created offer_id=%s business_id=%s", offer_doc["_id"], parsed_business_id)

        items = await self._serialize_offers([offer_doc])
        return items[0]

    async def list_business_offers(self, business_id: str, active: bool | None = None) -> list[dict]:
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        offer_docs = await self.store.offers.list_for_business(parsed_business_id, is_active=active)
        return await self._serialize_offers(offer_docs)

    async def list_offers(self, active_only: bool = False) -> list[dict]:
        offer_docs = await self.store.offers.list_all(active_at=self._now() if active_only else None)
        return await self._serialize_offers(offer_docs)

    async def update_offer(self, offer_id: str, caller: Caller, payload: OfferUpdate) -> dict:
        parsed_offer_id = self._parse_object_id(offer_id, field_name="offer_id")
        offer_doc = await self._get_owned_offer(parsed_offer_id, caller, "Not authorized to update offer")

        fields = payload.model_dump(mode="python", exclude_unset=True)
        for key in ("title", "valid_from", "valid_to", "is_active"):
            if key in fields and fields[key] is None:
                raise BadRequestError(f"'{key}' cannot be null.")
        valid_from = _as_utc(fields.get("valid_from", offer_doc.get("valid_from")))
        valid_to = _as_utc(fields.get("valid_to", offer_doc.get("valid_to")))
        if valid_from is not None and valid_to is not None and valid_to < valid_from:
            raise BadRequestError("valid_to must not be earlier than valid_from.")
        if not fields:
            return (await self._serialize_offers([offer_doc]))[0]

        updated = await self.store.offers.update_fields(parsed_offer_id, fields)
        if updated is None:
            raise NotFoundError("Offer not found")
        return (await self._serialize_offers([updated]))[0]

    async def delete_offer(self, offer_id: str, caller: Caller) -> dict:
        parsed_offer_id = self._parse_object_id(offer_id, field_name="offer_id")
        await self._get_owned_offer(parsed_offer_id, caller, "Not authorized to delete offer")
        await self.store.offers.delete(parsed_offer_id)
        LOGGER.info("Offer deleted offer_id=%s by=%s", parsed_offer_id, caller.id)
        return {"message": "Offer deleted successfully"}

    async def _get_owned_offer(self, offer_id: str, caller: Caller, message: str) -> dict[str, Any]:
        offer_doc = await self.store.offers.get(offer_id)
        if offer_doc is None:
            raise NotFoundError("Offer not found")
        business_doc = await self.store.businesses.get(str(offer_doc.get("business_id")))
        # An offer whose business is gone can only be managed by an admin.
        owner_id = business_doc.get("owner_id") if business_doc is not None else None
        self._require_owner_or_admin(caller, owner_id, message)
        return offer_doc

    async def _serialize_offers(self, offer_docs: list[dict[str, Any]]) -> list[dict]:
        businesses = await self.store.businesses.get_many(doc.get("business_id") for doc in offer_docs)
        now = self._now()
        items = []
        for doc in offer_docs:
            item = self._serialize_doc(doc)
            business_doc = businesses.get(str(doc.get("business_id")))
            item["business"] = (
                {
                    "id": str(business_doc["_id"]),
                    **{key: business_doc.get(key) for key in self._BUSINESS_SUMMARY_FIELDS},
                }
                if business_doc is not None
                else None
            )
            item["is_currently_active"] = is_offer_active(doc, now)
            items.append(item)
        return self._sanitize_response_payload(items)
