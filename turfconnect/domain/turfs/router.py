"""Turf router - FastAPI endpoints for turf discovery and owner management"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import (
    TurfClaimRequest,
    TurfClaimResponse,
    TurfCreate,
    TurfPriceUpdate,
    TurfResponse,
    TurfStatusUpdate,
)
from .service import TurfService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/turfs", tags=["Turfs"])


def get_turf_service(db: Session = Depends(get_db)) -> TurfService:
    """Dependency injection for TurfService"""
    return TurfService(db)


@router.get("", response_model=list[TurfResponse])
async def list_turfs(
    area: Optional[str] = Query(None),
    sport: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    service: TurfService = Depends(get_turf_service),
):
    """Active turfs, newest first"""
    return service.list_turfs(area=area, sport=sport, search=search)


@router.get("/mine", response_model=list[TurfResponse])
async def list_my_turfs(
    current_user: Profile = Depends(get_current_user),
    service: TurfService = Depends(get_turf_service),
):
    """Turfs registered or claimed by the current owner"""
    return service.list_owner_turfs(current_user)


@router.post("/claim", response_model=TurfClaimResponse)
async def claim_turf(
    data: TurfClaimRequest,
    current_user: Profile = Depends(get_current_user),
    service: TurfService = Depends(get_turf_service),
):
    return service.claim_turf(data.turfId, current_user)


@router.get("/{turf_id}", response_model=TurfResponse)
async def get_turf(turf_id: str, service: TurfService = Depends(get_turf_service)):
    return service.get_turf(turf_id)


@router.post("", response_model=TurfResponse, status_code=201)
async def create_turf(
    data: TurfCreate,
    current_user: Profile = Depends(get_current_user),
    service: TurfService = Depends(get_turf_service),
):
    """Register a turf; it stays pending until an admin approves it"""
    return await service.create_turf(data, current_user)


@router.patch("/{turf_id}/status", response_model=TurfResponse)
async def update_turf_status(
    turf_id: str,
    data: TurfStatusUpdate,
    current_user: Profile = Depends(get_current_user),
    service: TurfService = Depends(get_turf_service),
):
    return service.update_status(turf_id, data.status, current_user)


@router.patch("/{turf_id}/price", response_model=TurfResponse)
async def update_turf_price(
    turf_id: str,
    data: TurfPriceUpdate,
    current_user: Profile = Depends(get_current_user),
    service: TurfService = Depends(get_turf_service),
):
    return service.update_price(turf_id, data.basePricePerHour, current_user)


__all__ = ["router"]
