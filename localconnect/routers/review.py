from fastapi import APIRouter, Depends, status

from localconnect.auth import Caller
from localconnect.dependencies import get_current_caller, get_store
from localconnect.models.review import ReviewCreate, ReviewUpdate
from localconnect.repositories.store import Store
from localconnect.services.review_service import ReviewService

router = APIRouter(prefix="/review", tags=["Review"])


@router.post("/{business_id}", status_code=status.HTTP_201_CREATED)
async def submit_review(
    business_id: str,
    payload: ReviewCreate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = ReviewService(store)
    return await service.submit_review(caller, business_id, rating=payload.rating, comment=payload.comment)


@router.get("/{business_id}")
async def list_reviews(business_id: str, store: Store = Depends(get_store)) -> list[dict]:
    service = ReviewService(store)
    return await service.list_reviews(business_id)


@router.put("/{review_id}")
async def update_review(
    review_id: str,
    payload: ReviewUpdate,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = ReviewService(store)
    return await service.update_review(review_id, caller, rating=payload.rating, comment=payload.comment)


@router.delete("/{review_id}")
async def delete_review(
    review_id: str,
    caller: Caller = Depends(get_current_caller),
    store: Store = Depends(get_store),
) -> dict:
    service = ReviewService(store)
    return await service.delete_review(review_id, caller)
