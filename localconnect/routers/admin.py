from fastapi import APIRouter, Depends

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.repositories.store import Store
from localconnect.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/analytics")
async def get_admin_analytics(
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = AdminService(store)
    return await service.get_analytics(caller)
