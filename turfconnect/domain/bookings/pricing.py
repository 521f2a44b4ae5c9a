"""Booking price computation for slot and hourly bookings"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

from ...shared.validators import validate_time_of_day


@dataclass(frozen=True)
class BookingPricing:
    hours: float
    base_amount: float
    premium_charges: float
    total_amount: float

    def to_dict(self) -> dict:
        return asdict(self)


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        normalized = validate_time_of_day(value)
    except ValueError:
        return None
    return datetime.strptime(normalized, "%H:%M")


def calculate_slot_pricing(slot) -> BookingPricing:
    """Price a predefined slot: its duration in hours at the slot's fixed price"""
    hours = slot.duration_minutes / 60
    base_amount = float(slot.price)
    return BookingPricing(
        hours=hours,
        base_amount=base_amount,
        premium_charges=0.0,
        total_amount=base_amount,
    )


def calculate_hourly_pricing(
    hourly_rate: float, start_time: Optional[str], end_time: Optional[str]
) -> Optional[BookingPricing]:
    """
    Price a free-form booking on the same day.

    Returns None while the range is undefined (a time missing or unparseable,
    or the end not after the start). Weekend and peak-hour premium settings on
    the turf are not applied, so premium charges are always zero.
    """
    start = _parse_time(start_time)
    end = _parse_time(end_time)
    if start is None or end is None or end <= start:
        return None

    hours = (end - start).total_seconds() / 3600
    base_amount = hours * float(hourly_rate)
    return BookingPricing(
        hours=hours,
        base_amount=base_amount,
        premium_charges=0.0,
        total_amount=base_amount,
    )


def calculate_booking_pricing(
    turf, slot=None, start_time: Optional[str] = None, end_time: Optional[str] = None
) -> Optional[BookingPricing]:
    """Slot mode when a slot is chosen, hourly mode from the turf rate otherwise"""
    if slot is not None:
        return calculate_slot_pricing(slot)
    return calculate_hourly_pricing(turf.base_price_per_hour, start_time, end_time)
