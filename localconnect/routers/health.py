from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from localconnect.config import settings
from localconnect.database import indexes_ready, ping_mongo_detailed

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
    mongo: str
    database: str
    indexes: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    detail: str | None = None


@router.get("/health", response_model=HealthResponse)
async def get_health() -> JSONResponse:
    """Report MongoDB reachability and whether the geo/unique indexes were built at startup.

    503 only when MongoDB is unreachable; missing indexes degrade the status
    because nearby search and duplicate detection depend on them.
    """
    mongo_ok, mongo_detail = await ping_mongo_detailed()
    indexes_ok = mongo_ok and indexes_ready()
    payload = HealthResponse(
        status="ok" if indexes_ok else "degraded",
        service=settings.app_name,
        environment=settings.app_env,
        mongo="up" if mongo_ok else "down",
        database=settings.db_name,
        indexes="ready" if indexes_ok else "pending",
        detail=mongo_detail if not mongo_ok else None,
    )
    http_status = status.HTTP_200_OK if mongo_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=http_status, content=payload.model_dump(mode="json", exclude_none=True))
