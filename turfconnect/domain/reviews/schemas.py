"""Review domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    bookingId: str
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewResponse(BaseModel):
    id: str
    booking_id: str
    turf_id: str
    user_id: str
    rating: int
    comment: Optional[str] = None
    reviewer_name: Optional[str] = None
    created_at: Optional[datetime] = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    average_rating: Optional[float] = None
    total_reviews: int
