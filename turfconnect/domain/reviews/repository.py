"""Review repository - Database operations for turf reviews"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Review


class ReviewRepository:
    """Repository for review database operations"""

    @staticmethod
    def list_turf_reviews(db: Session, turf_id: str) -> list[Review]:
        return (
            db.query(Review)
            .options(joinedload(Review.user))
            .filter(Review.turf_id == turf_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def create_review(db: Session, **review_data) -> Review:
        review = Review(**review_data)
        db.add(review)
        db.commit()
        db.refresh(review)
        return review
