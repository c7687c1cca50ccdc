from fastapi import APIRouter, Depends, status

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.models.offer import CategoryCreate
from localconnect.repositories.store import Store
from localconnect.services.category_service import CategoryService

router = APIRouter(prefix="/category", tags=["Category"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = CategoryService(store)
    return await service.create_category(caller, payload.name, payload.icon)


@router.get("")
async def list_categories(store: Store = Depends(get_store)) -> list[dict]:
    service = CategoryService(store)
    return await service.list_categories()
