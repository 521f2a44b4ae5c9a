"""Booking service - Pricing, creation and status management for bookings"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Booking, Profile, Turf, TurfSlot
from ..turfs.service import TurfService
from .pricing import BookingPricing, calculate_booking_pricing
from .repository import BookingRepository
from .schemas import BookingCreate, BookingQuoteRequest

logger = logging.getLogger(__name__)

BOOKING_STATUS_FILTERS = {"all", "pending", "confirmed", "completed", "cancelled"}

# Allowed owner transitions; completed and cancelled are final
STATUS_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}

CUSTOMER_CANCELLABLE = {"pending", "confirmed"}


def js_weekday(value: date) -> int:
    """Weekday number with Sunday as 0, matching slot day_of_week"""
    return (value.weekday() + 1) % 7


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.turfs = TurfService(db)

    def _get_bookable_turf(self, turf_id: str) -> Turf:
        turf = self.repo.get_turf(self.db, turf_id)
        if not turf:
            raise HTTPException(status_code=404, detail="Turf not found")
        if turf.status != "active":
            raise HTTPException(status_code=400, detail="This turf is not accepting bookings")
        return turf

    def _get_turf_slot(self, turf: Turf, slot_id: Optional[str]) -> Optional[TurfSlot]:
        if not slot_id:
            return None
        slot = self.repo.get_slot(self.db, slot_id)
        if not slot or slot.turf_id != turf.id:
            raise HTTPException(status_code=404, detail="Slot not found")
        return slot

    def quote(self, data: BookingQuoteRequest) -> Optional[BookingPricing]:
        """Price shown while the form is filled in; None until the range is valid"""
        turf = self._get_bookable_turf(data.turfId)
        slot = self._get_turf_slot(turf, data.slotId)
        return calculate_booking_pricing(turf, slot, data.startTime, data.endTime)

    def create_booking(self, data: BookingCreate, user: Profile) -> Booking:
        turf = self._get_bookable_turf(data.turfId)
        slot = self._get_turf_slot(turf, data.slotId)

        if data.bookingDate < date.today():
            raise HTTPException(status_code=400, detail="Booking date cannot be in the past")

        if slot is not None:
            if not slot.is_available:
                raise HTTPException(status_code=400, detail="This slot is not available")
            if slot.day_of_week != js_weekday(data.bookingDate):
                raise HTTPException(status_code=400, detail="Selected slot is not offered on that day")
            start_time, end_time = slot.start_time, slot.end_time
        else:
            if not data.startTime or not data.endTime:
                raise HTTPException(status_code=400, detail="Please fill in all required fields")
            start_time, end_time = data.startTime, data.endTime

        pricing = calculate_booking_pricing(turf, slot, start_time, end_time)
        if pricing is None:
            raise HTTPException(status_code=400, detail="End time must be after start time")

        booking = self.repo.create_booking(
            self.db,
            user.id,
            turf_id=turf.id,
            slot_id=slot.id if slot else None,
            booking_date=data.bookingDate,
            start_time=start_time,
            end_time=end_time,
            total_hours=pricing.hours,
            base_price=pricing.base_amount,
            premium_charges=pricing.premium_charges,
            total_amount=pricing.total_amount,
            status="pending",
            payment_status="pending",
            player_name=data.playerName.strip(),
            player_phone=data.playerPhone,
            player_email=data.playerEmail,
            special_requests=data.specialRequests,
        )
        logger.info(f"✅ Booking {booking.id} created for turf {turf.id} on {data.bookingDate} ({start_time}-{end_time})")
        return booking

    def list_my_bookings(self, user: Profile) -> list[Booking]:
        return self.repo.list_user_bookings(self.db, user.id)

    def list_owner_bookings(self, user: Profile, status: str = "all") -> list[Booking]:
        if status not in BOOKING_STATUS_FILTERS:
            raise HTTPException(status_code=400, detail=f"Unknown status filter: {status}")
        owner = self.turfs.get_owner(user)
        return self.repo.list_owner_bookings(self.db, owner.id, None if status == "all" else status)

    def update_status(self, booking_id: str, status: str, user: Profile) -> Booking:
        """Owner moves a booking on one of their turfs to its next status"""
        owner = self.turfs.get_owner(user)
        booking = self.repo.get_booking(self.db, booking_id)
        if not booking or booking.turf is None or booking.turf.owner_id != owner.id:
            raise HTTPException(status_code=404, detail="Booking not found")

        if status not in STATUS_TRANSITIONS.get(booking.status, set()):
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking from {booking.status} to {status}",
            )

        booking = self.repo.update_booking(self.db, booking, status=status)
        logger.info(f"✅ Booking {booking_id} marked {status} by owner {owner.id}")
        return booking

    def cancel_booking(self, booking_id: str, user: Profile) -> Booking:
        booking = self.repo.get_booking(self.db, booking_id)
        if not booking or booking.user_id != user.id:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status not in CUSTOMER_CANCELLABLE:
            raise HTTPException(status_code=400, detail=f"Cannot cancel a {booking.status} booking")

        booking = self.repo.update_booking(self.db, booking, status="cancelled")
        logger.info(f"🚫 Booking {booking_id} cancelled by customer {user.id}")
        return booking
