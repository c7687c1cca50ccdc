from fastapi import APIRouter, Depends, status

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.repositories.store import Store
from localconnect.services.follow_service import FollowService

router = APIRouter(prefix="/follow", tags=["Follow"])


@router.get("/my")
async def list_my_followed_businesses(
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = FollowService(store)
    return await service.list_followed_businesses(caller)


@router.get("/business/{business_id}")
async def list_business_followers(
    business_id: str,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> list[dict]:
    service = FollowService(store)
    return await service.list_followers(business_id, caller)


@router.post("/{business_id}", status_code=status.HTTP_201_CREATED)
async def follow_business(
    business_id: str,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = FollowService(store)
    follow = await service.follow_business(caller, business_id)
    return {"message": "Business followed successfully", "follow": follow}


@router.delete("/{business_id}")
async def unfollow_business(
    business_id: str,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = FollowService(store)
    return await service.unfollow_business(caller, business_id)
