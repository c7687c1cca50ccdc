from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from localconnect.models.geo import GeoPoint


class UserRole(str, Enum):
    CUSTOMER = "customer"
    BUSINESS_OWNER = "businessOwner"
    ADMIN = "admin"


class User(BaseModel):
    id: str | None = None
    name: str
    email: str
    password_hash: str
    profile_pic: str | None = None
    role: UserRole = UserRole.CUSTOMER
    favorites: list[str] = Field(default_factory=list)
    home_location: GeoPoint | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(use_enum_values=True, validate_default=True)
