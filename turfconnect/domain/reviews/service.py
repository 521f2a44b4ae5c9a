"""Review service - Turf ratings left by customers"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import build_review_list_key, cache, invalidate_turf_reviews
from ...models import Profile, Review
from .repository import ReviewRepository
from .schemas import ReviewCreate

logger = logging.getLogger(__name__)

REVIEW_LIST_TTL = 300


def review_to_dict(review: Review) -> dict:
    return {
        "id": review.id,
        "booking_id": review.booking_id,
        "turf_id": review.turf_id,
        "user_id": review.user_id,
        "rating": review.rating,
        "comment": review.comment,
        "reviewer_name": review.user.full_name if review.user else None,
        "created_at": review.created_at.isoformat() if review.created_at else None,
    }


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()

    def list_turf_reviews(self, turf_id: str) -> dict:
        """Newest reviews first with the turf's average rating"""
        cache_key = build_review_list_key(turf_id)
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        reviews = [review_to_dict(r) for r in self.repo.list_turf_reviews(self.db, turf_id)]
        average = round(sum(r["rating"] for r in reviews) / len(reviews), 1) if reviews else None
        result = {"reviews": reviews, "average_rating": average, "total_reviews": len(reviews)}
        cache.set(cache_key, result, REVIEW_LIST_TTL)
        return result

    def create_review(self, data: ReviewCreate, user: Profile) -> dict:
        booking = self.repo.get_booking(self.db, data.bookingId)
        if not booking or booking.user_id != user.id:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status != "completed":
            raise HTTPException(status_code=400, detail="Only completed bookings can be reviewed")

        review = self.repo.create_review(
            self.db,
            booking_id=booking.id,
            turf_id=booking.turf_id,
            user_id=user.id,
            rating=data.rating,
            comment=data.comment.strip() if data.comment else None,
        )
        invalidate_turf_reviews(booking.turf_id)
        logger.info(f"⭐ Review {review.id} ({data.rating}/5) added for turf {booking.turf_id}")
        return review_to_dict(review)
