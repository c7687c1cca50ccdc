"""Caller identity resolved from a bearer token.

Token issuance belongs to the identity service; this module only decodes
``Authorization: Bearer <jwt>`` headers whose ``sub`` claim is a user id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from localconnect.config import settings
from localconnect.errors import UnauthorizedError
from localconnect.models.user import UserRole
from localconnect.repositories.store import Store


@dataclass(frozen=True)
class Caller:
    id: str
    role: str
    user: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value


def encode_access_token(user_id: str, expires_in_seconds: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = expires_in_seconds if expires_in_seconds is not None else settings.jwt_access_token_expires_s
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token expired. Please log in again.") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid token. Please log in again.") from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise UnauthorizedError("Invalid token. Please log in again.")
    return subject


def parse_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Not authorized, malformed Authorization header")
    return token.strip()


async def resolve_caller(token: str, store: Store) -> Caller:
    user_id = decode_access_token(token)
    user = await store.users.get(user_id)
    if user is None:
        raise UnauthorizedError("Not authorized, user not found")
    role = str(user.get("role") or UserRole.CUSTOMER.value)
    return Caller(id=str(user["_id"]), role=role, user=user)
