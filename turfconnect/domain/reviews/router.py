"""Review router - FastAPI endpoints for turf reviews"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import ReviewCreate, ReviewListResponse, ReviewResponse
from .service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@router.get("/turf/{turf_id}", response_model=ReviewListResponse)
async def list_turf_reviews(turf_id: str, service: ReviewService = Depends(get_review_service)):
    return service.list_turf_reviews(turf_id)


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    data: ReviewCreate,
    current_user: Profile = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    """Rate a turf for one of the caller's bookings"""
    return service.create_review(data, current_user)


__all__ = ["router"]
