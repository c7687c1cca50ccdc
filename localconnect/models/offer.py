from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _assume_utc(value: datetime | None) -> datetime | None:
    # Naive timestamps are read as UTC so they compare with offset-aware ones.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Offer(BaseModel):
    id: str | None = None
    business_id: str
    title: str
    description: str | None = None
    discount_percent: float | None = Field(default=None, ge=0.0, le=100.0)
    valid_from: datetime
    valid_to: datetime
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class OfferCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str | None = None
    discount_percent: float | None = Field(default=None, ge=0.0, le=100.0)
    valid_from: datetime
    valid_to: datetime
    is_active: bool = True

    model_config = ConfigDict(extra="forbid")

    @field_validator("valid_from", "valid_to")
    @classmethod
    def normalize_window(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)

    @model_validator(mode="after")
    def validate_window(self) -> "OfferCreate":
        if self.valid_to < self.valid_from:
            raise ValueError("valid_to must not be earlier than valid_from.")
        return self


class OfferUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    discount_percent: float | None = Field(default=None, ge=0.0, le=100.0)
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("valid_from", "valid_to")
    @classmethod
    def normalize_window(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)


class Category(BaseModel):
    id: str | None = None
    name: str
    icon: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CategoryCreate(BaseModel):
    name: str = ""
    icon: str | None = None

    model_config = ConfigDict(extra="forbid")
