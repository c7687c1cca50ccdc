from __future__ import annotations

from localconnect.auth import Caller
from localconnect.errors import NotFoundError
from localconnect.services.base import BaseService


class UserService(BaseService):
    _PRIVATE_FIELDS = ("password_hash", "password")

    async def get_profile(self, caller: Caller) -> dict:
        user_doc = await self.store.users.get(caller.id)
        if user_doc is None:
            raise NotFoundError("User not found")

        payload = self._serialize_doc(user_doc)
        for key in self._PRIVATE_FIELDS:
            payload.pop(key, None)
        return self._sanitize_response_payload(payload)
