"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone_number, validate_time_of_day


class BookingQuoteRequest(BaseModel):
    """Price preview for the booking form"""

    turfId: str
    slotId: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None


class BookingCreate(BaseModel):
    turfId: str
    slotId: Optional[str] = None
    bookingDate: date
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    playerName: str = Field(min_length=1)
    playerPhone: str
    playerEmail: Optional[str] = None
    specialRequests: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_times(cls, v):
        return validate_time_of_day(v)

    @field_validator("playerPhone")
    @classmethod
    def validate_phone(cls, v):
        if not validate_phone_number(v):
            raise ValueError("Please enter a valid phone number")
        return v.strip()

    @field_validator("playerEmail")
    @classmethod
    def validate_player_email(cls, v):
        return validate_email(v)


class BookingStatusUpdate(BaseModel):
    status: Literal["confirmed", "completed", "cancelled"]


class PricingResponse(BaseModel):
    hours: float
    base_amount: float
    premium_charges: float
    total_amount: float


class BookingQuoteResponse(BaseModel):
    pricing: Optional[PricingResponse] = None
    message: Optional[str] = None


class TurfSummary(BaseModel):
    id: str
    name: str
    area: Optional[str] = None
    address: Optional[str] = None

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    id: str
    turf_id: str
    user_id: str
    slot_id: Optional[str] = None
    booking_date: date
    start_time: str
    end_time: str
    total_hours: float
    base_price: float
    premium_charges: float
    total_amount: float
    status: str
    payment_status: str
    player_name: Optional[str] = None
    player_phone: Optional[str] = None
    player_email: Optional[str] = None
    special_requests: Optional[str] = None
    created_at: Optional[datetime] = None
    turf: Optional[TurfSummary] = None

    class Config:
        from_attributes = True
