"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Turf, TurfSlot


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_turf(db: Session, turf_id: str) -> Optional[Turf]:
        return db.query(Turf).filter(Turf.id == turf_id).first()

    @staticmethod
    def get_slot(db: Session, slot_id: str) -> Optional[TurfSlot]:
        return db.query(TurfSlot).filter(TurfSlot.id == slot_id).first()

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.turf))
            .filter(Booking.id == booking_id)
            .first()
        )

    @staticmethod
    def create_booking(db: Session, user_id: str, **booking_data) -> Booking:
        booking = Booking(user_id=user_id, **booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def list_user_bookings(db: Session, user_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.turf))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
            .all()
        )

    @staticmethod
    def list_owner_bookings(db: Session, owner_id: str, status: Optional[str] = None) -> list[Booking]:
        query = (
            db.query(Booking)
            .join(Turf, Booking.turf_id == Turf.id)
            .options(joinedload(Booking.turf))
            .filter(Turf.owner_id == owner_id)
        )
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.booking_date.desc(), Booking.start_time.desc()).all()

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            if value is not None and hasattr(booking, key):
                setattr(booking, key, value)

        db.commit()
        db.refresh(booking)
        return booking
