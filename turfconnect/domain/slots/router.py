"""Slot router - FastAPI endpoints for turf slot management"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import PresetApplyRequest, PresetApplyResponse, SlotCreate, SlotResponse, SlotUpdate
from .service import SlotService, get_slot_presets

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slots", tags=["Slots"])


def get_slot_service(db: Session = Depends(get_db)) -> SlotService:
    """Dependency injection for SlotService"""
    return SlotService(db)


@router.get("/presets")
async def list_presets():
    """Available slot presets and their times"""
    return get_slot_presets()


@router.get("/turf/{turf_id}", response_model=list[SlotResponse])
async def list_available_slots(turf_id: str, service: SlotService = Depends(get_slot_service)):
    """Bookable slots ordered by weekday and start time"""
    return service.list_available_slots(turf_id)


@router.get("/turf/{turf_id}/all", response_model=list[SlotResponse])
async def list_owner_slots(
    turf_id: str,
    current_user: Profile = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service),
):
    return service.list_owner_slots(turf_id, current_user)


@router.post("/turf/{turf_id}", response_model=SlotResponse, status_code=201)
async def create_slot(
    turf_id: str,
    data: SlotCreate,
    current_user: Profile = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service),
):
    return service.create_slot(turf_id, data, current_user)


@router.post("/turf/{turf_id}/presets", response_model=PresetApplyResponse)
async def apply_preset(
    turf_id: str,
    data: PresetApplyRequest,
    current_user: Profile = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service),
):
    """Create a preset's slots on each selected day; partial failures are reported"""
    return await service.apply_preset(turf_id, data, current_user)


@router.patch("/{slot_id}", response_model=SlotResponse)
async def update_slot(
    slot_id: str,
    data: SlotUpdate,
    current_user: Profile = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service),
):
    return service.update_slot(slot_id, data, current_user)


@router.delete("/{slot_id}")
async def delete_slot(
    slot_id: str,
    current_user: Profile = Depends(get_current_user),
    service: SlotService = Depends(get_slot_service),
):
    return service.delete_slot(slot_id, current_user)


__all__ = ["router"]
