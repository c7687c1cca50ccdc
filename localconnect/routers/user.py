from fastapi import APIRouter, Depends

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.repositories.store import Store
from localconnect.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile")
async def get_profile(
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = UserService(store)
    return await service.get_profile(caller)
