"""Player domain schemas - Profiles, phone verification and player search"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_phone_number

SKILL_LEVELS = ["Beginner", "Intermediate", "Advanced", "Professional"]


def _check_phone(v: Optional[str]) -> Optional[str]:
    if v is None or not v.strip():
        return None
    if not validate_phone_number(v):
        raise ValueError("Please enter a valid phone number")
    return v.strip()


class PlayerProfileSetup(BaseModel):
    """Player profile form submitted after sign-up"""

    fullName: str = Field(min_length=1)
    phoneNumber: str
    age: int = Field(ge=5, le=100)
    gender: Literal["male", "female", "other"]
    location: str = Field(min_length=1)
    preferredSports: list[str] = Field(min_length=1)
    skillLevel: Literal["Beginner", "Intermediate", "Advanced", "Professional"]
    maxTravelDistance: int = Field(default=25, ge=1, le=200)
    whatsappNumber: Optional[str] = None
    preferredContact: Literal["phone", "whatsapp", "both"] = "whatsapp"

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone(cls, v):
        phone = _check_phone(v)
        if phone is None:
            raise ValueError("Please enter your phone number")
        return phone

    @field_validator("whatsappNumber")
    @classmethod
    def validate_whatsapp(cls, v):
        return _check_phone(v)

    @field_validator("preferredSports")
    @classmethod
    def normalize_sports(cls, v):
        sports = []
        for sport in v:
            name = sport.strip().lower()
            if name and name not in sports:
                sports.append(name)
        if not sports:
            raise ValueError("Select at least one sport")
        return sports


class PlayerProfileUpdate(BaseModel):
    fullName: Optional[str] = None
    phoneNumber: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=5, le=100)
    gender: Optional[Literal["male", "female", "other"]] = None
    location: Optional[str] = None
    maxTravelDistance: Optional[int] = Field(default=None, ge=1, le=200)
    whatsappNumber: Optional[str] = None
    preferredContact: Optional[Literal["phone", "whatsapp", "both"]] = None
    isAvailable: Optional[bool] = None

    @field_validator("phoneNumber", "whatsappNumber")
    @classmethod
    def validate_phones(cls, v):
        return _check_phone(v)


class PhoneCodeRequest(BaseModel):
    phoneNumber: Optional[str] = None

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)


class PhoneCodeVerifyRequest(BaseModel):
    code: str


class SportsProfileResponse(BaseModel):
    id: str
    sport: str
    skill_level: int
    experience_level: Optional[str] = None
    preferred_positions: Optional[list[str]] = None
    is_active: bool

    class Config:
        from_attributes = True


class PlayerProfileResponse(BaseModel):
    id: str
    user_id: str
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    max_travel_distance: Optional[int] = None
    whatsapp_number: Optional[str] = None
    preferred_contact: Optional[str] = None
    is_available: bool
    overall_rating: Optional[float] = None
    total_games_played: Optional[int] = None
    phone_verified: bool
    created_at: Optional[datetime] = None
    sports: list[SportsProfileResponse] = []

    class Config:
        from_attributes = True


class PlayerSearchResult(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    is_available: bool
    overall_rating: Optional[float] = None
    total_games_played: Optional[int] = None
    preferred_contact: Optional[str] = None
    sport: str
    skill_level: int
    experience_level: Optional[str] = None
    preferred_positions: Optional[list[str]] = None


class PhoneStatusResponse(BaseModel):
    phone_number: Optional[str] = None
    phone_verified: bool
    redirect_to: Optional[str] = None


class PhoneVerificationResponse(BaseModel):
    title: str
    description: str
    expires_at: Optional[datetime] = None
    redirect_to: Optional[str] = None
