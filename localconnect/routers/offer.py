from fastapi import APIRouter, Depends, Query, status

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.models.offer import OfferCreate, OfferUpdate
from localconnect.repositories.store import Store
from localconnect.services.offer_service import OfferService

router = APIRouter(prefix="/offer", tags=["Offer"])


@router.get("")
async def list_offers(
    active: bool = Query(default=False, description="Only offers live right now."),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = OfferService(store)
    return await service.list_offers(active_only=active)


@router.post("/{business_id}", status_code=status.HTTP_201_CREATED)
async def create_offer(
    business_id: str,
    payload: OfferCreate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = OfferService(store)
    return await service.create_offer(business_id, caller, payload)


@router.get("/{business_id}")
async def list_business_offers(
    business_id: str,
    active: bool | None = Query(default=None),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = OfferService(store)
    return await service.list_business_offers(business_id, active=active)


@router.put("/{offer_id}")
async def update_offer(
    offer_id: str,
    payload: OfferUpdate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = OfferService(store)
    return await service.update_offer(offer_id, caller, payload)


@router.delete("/{offer_id}")
async def delete_offer(
    offer_id: str,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = OfferService(store)
    return await service.delete_offer(offer_id, caller)
