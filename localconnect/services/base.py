from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId

from localconnect.auth import Caller
from localconnect.errors import BadRequestError, ForbiddenError
from localconnect.repositories.store import Store


class BaseService:
    def __init__(self, store: Store) -> None:
        self.store = store

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _parse_object_id(self, value: str | None, *, field_name: str) -> str:
        raw = str(value or "").strip()
        if not ObjectId.is_valid(raw):
            raise BadRequestError(f"Invalid {field_name}. Expected a Mongo ObjectId string.")
        return raw

    def _coerce_pagination(self, *, page: int, page_size: int, max_page_size: int) -> tuple[int, int]:
        try:
            page_value = int(page)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("Invalid page. It must be an integer >= 1.") from exc
        try:
            page_size_value = int(page_size)
        except (TypeError, ValueError) as exc:
            raise BadRequestError("Invalid page_size. It must be an integer >= 1.") from exc

        if page_value < 1:
            raise BadRequestError("Invalid page. It must be >= 1.")
        if page_size_value < 1:
            raise BadRequestError("Invalid page_size. It must be >= 1.")
        return page_value, min(page_size_value, max_page_size)

    def _is_owner_or_admin(self, caller: Caller, owner_id: Any) -> bool:
        return caller.is_admin or str(owner_id) == caller.id

    def _require_owner_or_admin(self, caller: Caller, owner_id: Any, message: str) -> None:
        if not self._is_owner_or_admin(caller, owner_id):
            raise ForbiddenError(message)

    def _serialize_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        payload = dict(doc)
        payload["id"] = str(payload.pop("_id"))
        return payload

    def _user_summary(self, user_doc: dict[str, Any] | None) -> dict[str, Any] | None:
        if user_doc is None:
            return None
        return {
            "id": str(user_doc.get("_id")),
            "name": user_doc.get("name", ""),
            "email": user_doc.get("email", ""),
        }

    def _sanitize_response_payload(self, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        if isinstance(value, dict):
            return {key: self._sanitize_response_payload(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._sanitize_response_payload(item) for item in value]
        return value
