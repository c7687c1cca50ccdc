from datetime import datetime, timezone

from pydantic import BaseModel, Field


class Follow(BaseModel):
    id: str | None = None
    user_id: str
    business_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Visit(BaseModel):
    id: str | None = None
    user_id: str
    business_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VisitCreate(BaseModel):
    business_id: str | None = None
