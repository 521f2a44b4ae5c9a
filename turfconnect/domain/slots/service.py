"""Slot service - Weekly slot management and bulk preset creation"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import build_slot_list_key, cache, invalidate_turf_slots
from ...database import SessionLocal
from ...models import Profile, TurfSlot
from ..turfs.service import TurfService
from .repository import SlotRepository
from .schemas import PresetApplyRequest, SlotCreate, SlotResponse, SlotUpdate

logger = logging.getLogger(__name__)

SLOT_LIST_TTL = 300

# Six one-hour slots per preset
SLOT_PRESETS: dict[str, list[str]] = {
    "morning": ["06:00", "07:00", "08:00", "09:00", "10:00", "11:00"],
    "afternoon": ["12:00", "13:00", "14:00", "15:00", "16:00", "17:00"],
    "evening": ["16:00", "17:00", "18:00", "19:00", "20:00", "21:00"],
}
PRESET_DURATION_MINUTES = 60


def compute_end_time(start_time: str, duration_minutes: int) -> str:
    """End of a slot as HH:MM; slots may not run past midnight"""
    start = datetime.strptime(start_time, "%H:%M")
    end = start + timedelta(minutes=duration_minutes)
    if end.date() != start.date():
        raise HTTPException(status_code=400, detail="Slot must end by midnight")
    return end.strftime("%H:%M")


class SlotService:
    """Service layer for turf slot business logic"""

    def __init__(self, db: Session, session_factory: Callable[[], Session] = SessionLocal):
        self.db = db
        self.session_factory = session_factory
        self.repo = SlotRepository()
        self.turfs = TurfService(db)

    def list_available_slots(self, turf_id: str) -> list[dict]:
        cache_key = build_slot_list_key(turf_id)
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        slots = self.repo.list_slots(self.db, turf_id, available_only=True)
        result = [SlotResponse.model_validate(s).model_dump() for s in slots]
        cache.set(cache_key, result, SLOT_LIST_TTL)
        return result

    def list_owner_slots(self, turf_id: str, user: Profile) -> list[TurfSlot]:
        self.turfs.get_owned_turf(turf_id, user)
        return self.repo.list_slots(self.db, turf_id)

    def _get_owned_slot(self, slot_id: str, user: Profile) -> TurfSlot:
        slot = self.repo.get_slot(self.db, slot_id)
        if not slot:
            raise HTTPException(status_code=404, detail="Slot not found")
        self.turfs.get_owned_turf(slot.turf_id, user)
        return slot

    def create_slot(self, turf_id: str, data: SlotCreate, user: Profile) -> TurfSlot:
        self.turfs.get_owned_turf(turf_id, user)
        slot = self.repo.create_slot(
            self.db,
            turf_id,
            day_of_week=data.dayOfWeek,
            start_time=data.startTime,
            end_time=compute_end_time(data.startTime, data.durationMinutes),
            duration_minutes=data.durationMinutes,
            price=data.price,
            is_available=data.isAvailable,
        )
        invalidate_turf_slots(turf_id)
        return slot

    def update_slot(self, slot_id: str, data: SlotUpdate, user: Profile) -> TurfSlot:
        slot = self._get_owned_slot(slot_id, user)

        start_time = data.startTime or slot.start_time
        duration = data.durationMinutes or slot.duration_minutes
        updates = {
            "day_of_week": data.dayOfWeek,
            "start_time": data.startTime,
            "duration_minutes": data.durationMinutes,
            "end_time": compute_end_time(start_time, duration),
            "price": data.price,
            "is_available": data.isAvailable,
        }

        slot = self.repo.update_slot(self.db, slot, **updates)
        invalidate_turf_slots(slot.turf_id)
        return slot

    def delete_slot(self, slot_id: str, user: Profile) -> dict:
        slot = self._get_owned_slot(slot_id, user)
        turf_id = slot.turf_id
        self.repo.delete_slot(self.db, slot)
        invalidate_turf_slots(turf_id)
        return {"message": "Slot deleted successfully"}

    def _create_preset_slot(self, turf_id: str, spec: dict) -> dict:
        # Runs in a worker thread, so it needs a session of its own
        db = self.session_factory()
        try:
            slot = self.repo.create_slot(db, turf_id, **spec)
            return SlotResponse.model_validate(slot).model_dump()
        finally:
            db.close()

    async def apply_preset(self, turf_id: str, data: PresetApplyRequest, user: Profile) -> dict:
        """
        Create the preset's slots on every selected day.

        Each slot is an independent create issued concurrently; failures are
        counted and logged, and slots already created are kept.
        """
        turf = self.turfs.get_owned_turf(turf_id, user)
        price = data.price if data.price is not None else turf.base_price_per_hour

        specs = [
            {
                "day_of_week": day,
                "start_time": start,
                "end_time": compute_end_time(start, PRESET_DURATION_MINUTES),
                "duration_minutes": PRESET_DURATION_MINUTES,
                "price": price,
                "is_available": True,
            }
            for day in data.days
            for start in SLOT_PRESETS[data.preset]
        ]

        results = await asyncio.gather(
            *(asyncio.to_thread(self._create_preset_slot, turf_id, spec) for spec in specs),
            return_exceptions=True,
        )

        created = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            logger.error(f"❌ Preset slot creation failed for turf {turf_id}: {failure}")

        invalidate_turf_slots(turf_id)
        logger.info(
            f"✅ Applied '{data.preset}' preset to turf {turf_id}: {len(created)}/{len(specs)} slots created"
        )
        return {
            "requested": len(specs),
            "created": len(created),
            "failed": len(failures),
            "slots": created,
        }


def get_slot_presets() -> dict[str, list[dict]]:
    return {
        name: [
            {"start_time": start, "end_time": compute_end_time(start, PRESET_DURATION_MINUTES)}
            for start in starts
        ]
        for name, starts in SLOT_PRESETS.items()
    }
