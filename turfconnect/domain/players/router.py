"""Player router - FastAPI endpoints for player profiles, phone verification and discovery"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Profile
from ...rate_limiter import create_rate_limiter
from .schemas import (
    PhoneCodeRequest,
    PhoneCodeVerifyRequest,
    PhoneStatusResponse,
    PhoneVerificationResponse,
    PlayerProfileResponse,
    PlayerProfileSetup,
    PlayerProfileUpdate,
    PlayerSearchResult,
)
from .service import PlayerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/players", tags=["Players"])

phone_code_rate_limit = create_rate_limiter(limit=5, window_seconds=600, key_prefix="phone_code")


def get_player_service(db: Session = Depends(get_db)) -> PlayerService:
    """Dependency injection for PlayerService"""
    return PlayerService(db)


@router.post("/profile")
async def setup_profile(
    data: PlayerProfileSetup,
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    """Complete the player profile; the client is sent on to find players"""
    return service.setup_profile(data, current_user)


@router.get("/me", response_model=PlayerProfileResponse)
async def get_my_profile(
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    return service.get_my_profile(current_user)


@router.patch("/me", response_model=PlayerProfileResponse)
async def update_my_profile(
    data: PlayerProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    return service.update_my_profile(data, current_user)


@router.get("/phone/status", response_model=PhoneStatusResponse)
async def phone_status(
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    return service.phone_status(current_user)


@router.post("/phone/send-code", response_model=PhoneVerificationResponse)
async def send_phone_code(
    data: PhoneCodeRequest,
    _: None = Depends(phone_code_rate_limit),
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    """Issue a fresh 6-digit code, replacing any pending one"""
    return await service.send_phone_code(current_user, data.phoneNumber)


@router.post("/phone/verify", response_model=PhoneVerificationResponse)
async def verify_phone_code(
    data: PhoneCodeVerifyRequest,
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    return service.verify_phone_code(current_user, data.code)


@router.get("/search", response_model=list[PlayerSearchResult])
async def find_players(
    sport: str = Query(..., min_length=1),
    available: bool = Query(False),
    skill_min: Optional[int] = Query(None, ge=1),
    skill_max: Optional[int] = Query(None, ge=1),
    age_min: Optional[int] = Query(None, ge=0),
    age_max: Optional[int] = Query(None, ge=0),
    gender: Optional[str] = Query(None),
    min_rating: Optional[float] = Query(None, ge=0),
    current_user: Profile = Depends(get_current_user),
    service: PlayerService = Depends(get_player_service),
):
    """Up to 20 players for a sport, best rated first"""
    return service.find_players(
        current_user,
        sport,
        available_only=available,
        skill_min=skill_min,
        skill_max=skill_max,
        age_min=age_min,
        age_max=age_max,
        gender=gender,
        min_rating=min_rating,
    )


__all__ = ["router"]
