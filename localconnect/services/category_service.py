from __future__ import annotations

import logging

from localconnect.auth import Caller
from localconnect.errors import BadRequestError, ConflictError, ForbiddenError
from localconnect.models.offer import Category
from localconnect.services.base import BaseService

LOGGER = logging.getLogger(__name__)


class CategoryService(BaseService):
    async def create_category(self, caller: Caller, name: str, icon: str | None = None) -> dict:
        if not caller.is_admin:
            raise ForbiddenError("Only admins can create categories")

        category_name = str(name or "").strip()
        if not category_name:
            raise BadRequestError("Name is required")
        if await self.store.categories.find_by_name(category_name) is not None:
            raise ConflictError("Category already exists")

        category = Category(name=category_name, icon=icon)
        category_doc = await self.store.categories.insert(category.model_dump(mode="python", exclude={"id"}))
        LOGGER.info("Category created name=%r", category_name)
        return self._sanitize_response_payload(self._serialize_doc(category_doc))

    async def list_categories(self) -> list[dict]:
        docs = await self.store.categories.list_sorted()
        return self._sanitize_response_payload([self._serialize_doc(doc) for doc in docs])
