"""Slot domain schemas - Pydantic models for validation"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time_of_day

DurationMinutes = Literal[30, 60]


class SlotCreate(BaseModel):
    dayOfWeek: int = Field(ge=0, le=6)  # 0=Sunday
    startTime: str
    durationMinutes: DurationMinutes = 60
    price: float = Field(gt=0)
    isAvailable: bool = True

    @field_validator("startTime")
    @classmethod
    def validate_start(cls, v):
        return validate_time_of_day(v)


class SlotUpdate(BaseModel):
    dayOfWeek: Optional[int] = Field(default=None, ge=0, le=6)
    startTime: Optional[str] = None
    durationMinutes: Optional[DurationMinutes] = None
    price: Optional[float] = Field(default=None, gt=0)
    isAvailable: Optional[bool] = None

    @field_validator("startTime")
    @classmethod
    def validate_start(cls, v):
        return validate_time_of_day(v)


class PresetApplyRequest(BaseModel):
    """Apply one slot preset to several weekdays"""

    preset: Literal["morning", "afternoon", "evening"]
    days: list[int] = Field(min_length=1)
    price: Optional[float] = Field(default=None, gt=0)

    @field_validator("days")
    @classmethod
    def validate_days(cls, v):
        if any(day < 0 or day > 6 for day in v):
            raise ValueError("Days must be between 0 (Sunday) and 6 (Saturday)")
        return sorted(set(v))


class SlotResponse(BaseModel):
    id: str
    turf_id: str
    day_of_week: int
    start_time: str
    end_time: str
    duration_minutes: int
    price: float
    is_available: bool

    class Config:
        from_attributes = True


class PresetApplyResponse(BaseModel):
    requested: int
    created: int
    failed: int
    slots: list[SlotResponse]
