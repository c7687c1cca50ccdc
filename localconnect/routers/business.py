from fastapi import APIRouter, Depends, Query, status

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_optional_caller, get_store
from localconnect.models.business import BusinessCreate, BusinessUpdate
from localconnect.repositories.store import Store
from localconnect.services.business_service import BusinessService

router = APIRouter(prefix="/business", tags=["Business"])


@router.get("")
async def list_businesses(
    page: int | None = Query(default=None, ge=1),
    page_size: int | None = Query(default=None, ge=1, le=100),
    caller: Caller | None = Depends(get_optional_caller),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = BusinessService(store)
    return await service.list_businesses(caller, page=page, page_size=page_size)


@router.get("/nearby")
async def get_nearby_businesses(
    lng: str | None = Query(default=None),
    lat: str | None = Query(default=None),
    radius: str | None = Query(default=None, description="Search radius in kilometres."),
    caller: Caller | None = Depends(get_optional_caller),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = BusinessService(store)
    return await service.find_nearby(lng=lng, lat=lat, radius_km=radius, caller=caller)


@router.get("/{business_id}")
async def get_business(
    business_id: str,
    caller: Caller | None = Depends(get_optional_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = BusinessService(store)
    return await service.get_business(business_id, caller)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_business(
    payload: BusinessCreate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = BusinessService(store)
    return await service.create_business(caller, payload)


@router.put("/{business_id}")
async def update_business(
    business_id: str,
    payload: BusinessUpdate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = BusinessService(store)
    return await service.update_business(business_id, caller, payload)


@router.delete("/{business_id}")
async def delete_business(
    business_id: str,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = BusinessService(store)
    return await service.delete_business(business_id, caller)
