"""Turf domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_phone_number, validate_time_of_day


class TurfCreate(BaseModel):
    """Schema for registering a new turf"""

    name: str = Field(min_length=1)
    description: Optional[str] = None
    address: str = Field(min_length=1)
    area: str = Field(min_length=1)
    contactPhone: Optional[str] = None
    contactEmail: Optional[str] = None
    supportedSports: list[str] = []
    amenities: list[str] = []
    surfaceType: Optional[str] = None
    capacity: Optional[int] = Field(default=None, gt=0)
    coverImageUrl: Optional[str] = None
    images: list[str] = []
    basePricePerHour: float = Field(gt=0)
    weekendPremiumPercentage: float = Field(default=0, ge=0, le=100)
    peakHoursPremiumPercentage: float = Field(default=0, ge=0, le=100)
    peakHoursStart: Optional[str] = "18:00"
    peakHoursEnd: Optional[str] = "22:00"

    @field_validator("contactPhone")
    @classmethod
    def validate_phone(cls, v):
        if v and not validate_phone_number(v):
            raise ValueError("Please enter a valid phone number")
        return v.strip() if v else v

    @field_validator("contactEmail")
    @classmethod
    def validate_contact_email(cls, v):
        return validate_email(v)

    @field_validator("peakHoursStart", "peakHoursEnd")
    @classmethod
    def validate_peak_hours(cls, v):
        return validate_time_of_day(v)


class TurfStatusUpdate(BaseModel):
    status: Literal["active", "inactive", "maintenance"]


class TurfPriceUpdate(BaseModel):
    basePricePerHour: float = Field(gt=0)


class TurfClaimRequest(BaseModel):
    turfId: str

    @field_validator("turfId")
    @classmethod
    def strip_turf_id(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Please enter a valid Turf ID")
        return v


class TurfClaimResponse(BaseModel):
    message: str
    turf_id: str
    redirect_to: str


class TurfResponse(BaseModel):
    """Schema for turf response"""

    id: str
    owner_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    address: str
    area: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    supported_sports: Optional[list[str]] = None
    amenities: Optional[list[str]] = None
    surface_type: Optional[str] = None
    capacity: Optional[int] = None
    cover_image_url: Optional[str] = None
    images: Optional[list[str]] = None
    base_price_per_hour: float
    weekend_premium_percentage: Optional[float] = None
    peak_hours_premium_percentage: Optional[float] = None
    peak_hours_start: Optional[str] = None
    peak_hours_end: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
