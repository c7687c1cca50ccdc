from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    id: str | None = None
    user_id: str
    business_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = ""

    model_config = ConfigDict(extra="forbid")


class ReviewUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = None

    model_config = ConfigDict(extra="forbid")
