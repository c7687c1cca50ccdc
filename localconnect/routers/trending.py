from fastapi import APIRouter, Depends, Query, status

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.models.follow import VisitCreate
from localconnect.repositories.store import Store
from localconnect.services.trending_service import TrendingService
from localconnect.services.visit_service import VisitService

router = APIRouter(prefix="/trending", tags=["Trending"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def record_visit(
    payload: VisitCreate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = VisitService(store)
    visit = await service.record_visit(caller, payload.business_id)
    return {"message": "Visit recorded successfully", "visit": visit}


@router.get("")
async def get_trending(
    window_days: int | None = Query(default=None, ge=1, le=365),
    limit: int | None = Query(default=None, ge=1, le=50),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = TrendingService(store)
    return await service.get_trending(window_days=window_days, limit=limit)
