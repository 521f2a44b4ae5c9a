"""Booking router - FastAPI endpoints for customer and owner bookings"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import (
    BookingCreate,
    BookingQuoteRequest,
    BookingQuoteResponse,
    BookingResponse,
    BookingStatusUpdate,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("/quote", response_model=BookingQuoteResponse)
async def quote_booking(data: BookingQuoteRequest, service: BookingService = Depends(get_booking_service)):
    """Live price for the booking form"""
    pricing = service.quote(data)
    if pricing is None:
        return {"pricing": None, "message": "End time must be after start time"}
    return {"pricing": pricing.to_dict()}


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Book a slot or a free time range; the booking starts out pending"""
    return service.create_booking(data, current_user)


@router.get("/mine", response_model=list[BookingResponse])
async def list_my_bookings(
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_my_bookings(current_user)


@router.get("/owner", response_model=list[BookingResponse])
async def list_owner_bookings(
    status: str = Query("all"),
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Bookings across the owner's turfs, newest date first"""
    return service.list_owner_bookings(current_user, status)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.update_status(booking_id, data.status, current_user)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    current_user: Profile = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_booking(booking_id, current_user)


__all__ = ["router"]
