from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from localconnect.models.geo import GeoPoint


class Contact(BaseModel):
    phone: str | None = None
    email: str | None = None
    website: str | None = None


class Location(GeoPoint):
    address: str | None = None
    city: str | None = None
    state: str | None = None


class DayHours(BaseModel):
    open: str | None = None
    close: str | None = None


class OpeningHours(BaseModel):
    mon: DayHours | None = None
    tue: DayHours | None = None
    wed: DayHours | None = None
    thu: DayHours | None = None
    fri: DayHours | None = None
    sat: DayHours | None = None
    sun: DayHours | None = None


class Business(BaseModel):
    id: str | None = None
    owner_id: str
    name: str
    description: str | None = None
    category: str
    images: list[str] = Field(default_factory=list)
    contact: Contact = Field(default_factory=Contact)
    location: Location
    opening_hours: OpeningHours = Field(default_factory=OpeningHours)
    is_verified: bool = False
    is_featured: bool = False
    average_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    num_reviews: int = Field(default=0, ge=0)
    rating_version: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class BusinessCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    category: str = Field(min_length=1)
    images: list[str] = Field(default_factory=list)
    contact: Contact = Field(default_factory=Contact)
    location: Location
    opening_hours: OpeningHours = Field(default_factory=OpeningHours)

    model_config = ConfigDict(extra="forbid")


class BusinessUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1)
    images: list[str] | None = None
    contact: Contact | None = None
    location: Location | None = None
    opening_hours: OpeningHours | None = None
    is_verified: bool | None = None
    is_featured: bool | None = None

    model_config = ConfigDict(extra="forbid")
