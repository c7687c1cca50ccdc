from __future__ import annotations

import logging

from localconnect.auth import Caller
from localconnect.errors import BadRequestError, NotFoundError
from localconnect.models.follow import Visit
from localconnect.services.base import BaseService

LOGGER = logging.getLogger(__name__)


class VisitService(BaseService):
    async def record_visit(self, caller: Caller, business_id: str | None) -> dict:
        if not str(business_id or "").strip():
            raise BadRequestError("business_id required")
        parsed_business_id = self._parse_object_id(business_id, field_name="business_id")
        if not await self.store.businesses.exists(parsed_business_id):
            raise NotFoundError("Business not found")

        visit = Visit(user_id=caller.id, business_id=parsed_business_id)
        visit_doc = await self.store.visits.insert(visit.model_dump(mode="python", exclude={"id"}))
        LOGGER.info("Visit recorded user_id=%s business_id=%s", caller.id, parsed_business_id)
        return self._sanitize_response_payload(self._serialize_doc(visit_doc))
