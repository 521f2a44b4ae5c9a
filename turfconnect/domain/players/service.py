"""Player service - Player profiles, phone verification and player discovery"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import PHONE_CODE_TTL_MINUTES
from ...models import Profile, UserProfile
from ...navigation import Route
from ...services import sms_service
from .repository import PlayerRepository
from .schemas import SKILL_LEVELS, PlayerProfileSetup, PlayerProfileUpdate

logger = logging.getLogger(__name__)

PLAYER_SEARCH_LIMIT = 20


def generate_verification_code() -> str:
    """Six-digit numeric code, never starting with zero"""
    return str(100000 + secrets.randbelow(900000))


def sports_to_list(sports) -> list[dict]:
    return [
        {
            "id": s.id,
            "sport": s.sport,
            "skill_level": s.skill_level,
            "experience_level": s.experience_level,
            "preferred_positions": s.preferred_positions or [],
            "is_active": s.is_active,
        }
        for s in sports
    ]


class PlayerService:
    """Service layer for player profile business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PlayerRepository()

    def _profile_response(self, profile: UserProfile) -> dict:
        return {
            "id": profile.id,
            "user_id": profile.user_id,
            "full_name": profile.full_name,
            "phone_number": profile.phone_number,
            "age": profile.age,
            "gender": profile.gender,
            "location": profile.location,
            "max_travel_distance": profile.max_travel_distance,
            "whatsapp_number": profile.whatsapp_number,
            "preferred_contact": profile.preferred_contact,
            "is_available": profile.is_available,
            "overall_rating": profile.overall_rating,
            "total_games_played": profile.total_games_played,
            "phone_verified": profile.phone_verified,
            "created_at": profile.created_at,
            "sports": sports_to_list(self.repo.list_sports(self.db, profile.user_id)),
        }

    def _require_profile(self, user: Profile) -> UserProfile:
        profile = self.repo.get_profile(self.db, user.id)
        if not profile:
            raise HTTPException(status_code=404, detail="Player profile not found")
        return profile

    # Profile

    def setup_profile(self, data: PlayerProfileSetup, user: Profile) -> dict:
        """Save the player profile and one sports profile per preferred sport"""
        existing = self.repo.get_profile(self.db, user.id)
        # A changed number has to be verified again
        phone_changed = existing is not None and existing.phone_number != data.phoneNumber

        profile = self.repo.save_profile(
            self.db,
            user.id,
            full_name=data.fullName.strip(),
            phone_number=data.phoneNumber,
            age=data.age,
            gender=data.gender,
            location=data.location.strip(),
            max_travel_distance=data.maxTravelDistance,
            whatsapp_number=data.whatsappNumber,
            preferred_contact=data.preferredContact,
            is_available=True,
        )
        if phone_changed:
            profile.phone_verified = False

        skill_level = SKILL_LEVELS.index(data.skillLevel) + 1
        for sport in data.preferredSports:
            self.repo.upsert_sport(self.db, user.id, sport, skill_level, data.skillLevel.lower())
        self.db.commit()
        self.db.refresh(profile)

        logger.info(f"✅ Player profile set up for {user.id} ({', '.join(data.preferredSports)})")
        return {
            "title": "Profile Created!",
            "description": "Your player profile has been set up successfully.",
            "profile": self._profile_response(profile),
            "redirect_to": Route.FIND_PLAYERS.value,
        }

    def get_my_profile(self, user: Profile) -> dict:
        profile = self.repo.get_profile(self.db, user.id)
        if not profile:
            raise HTTPException(
                status_code=404,
                detail="Player profile not found",
                headers={"X-Redirect-To": Route.PLAYER_PROFILE_SETUP.value},
            )
        return self._profile_response(profile)

    def update_my_profile(self, data: PlayerProfileUpdate, user: Profile) -> dict:
        profile = self._require_profile(user)
        updates = {
            "full_name": data.fullName.strip() if data.fullName else None,
            "phone_number": data.phoneNumber,
            "age": data.age,
            "gender": data.gender,
            "location": data.location.strip() if data.location else None,
            "max_travel_distance": data.maxTravelDistance,
            "whatsapp_number": data.whatsappNumber,
            "preferred_contact": data.preferredContact,
            "is_available": data.isAvailable,
        }
        if data.phoneNumber and data.phoneNumber != profile.phone_number:
            updates["phone_verified"] = False
            profile.phone_verification_code = None
            profile.phone_verification_expires_at = None

        profile = self.repo.save_profile(self.db, user.id, **updates)
        return self._profile_response(profile)

    # Phone verification

    def phone_status(self, user: Profile) -> dict:
        """Where the phone verification page should send the user, if anywhere"""
        if user.role == "turf_owner":
            return {
                "phone_number": user.phone_number,
                "phone_verified": False,
                "redirect_to": Route.OWNER_DASHBOARD.value,
            }

        profile = self.repo.get_profile(self.db, user.id)
        if profile and profile.phone_verified:
            return {
                "phone_number": profile.phone_number,
                "phone_verified": True,
                "redirect_to": Route.FIND_PLAYERS.value,
            }

        phone = (profile.phone_number if profile else None) or user.phone_number
        return {"phone_number": phone, "phone_verified": False, "redirect_to": None}

    async def send_phone_code(self, user: Profile, phone_number: Optional[str] = None) -> dict:
        profile = self.repo.get_profile(self.db, user.id)
        phone = phone_number or (profile.phone_number if profile else None) or user.phone_number
        if not phone:
            raise HTTPException(status_code=400, detail="Please enter your phone number")

        code = generate_verification_code()
        expires_at = datetime.utcnow() + timedelta(minutes=PHONE_CODE_TTL_MINUTES)
        phone_changed = profile is not None and profile.phone_number != phone
        profile = self.repo.save_profile(
            self.db,
            user.id,
            full_name=(profile.full_name if profile else None) or user.full_name,
            phone_number=phone,
            phone_verified=False if phone_changed else None,
            phone_verification_code=code,
            phone_verification_expires_at=expires_at,
        )

        sent, error = await sms_service.send_verification_code(phone, code)
        if not sent:
            logger.error(f"❌ Failed to deliver verification code to {phone}: {error}")
            raise HTTPException(status_code=502, detail="Failed to send verification code. Please try again.")

        logger.info(f"📱 Verification code issued for user {user.id}")
        return {
            "title": "Verification Code Sent",
            "description": f"Enter the 6-digit code sent to {phone}",
            "expires_at": expires_at,
        }

    def verify_phone_code(self, user: Profile, code: str) -> dict:
        code = (code or "").strip()
        if len(code) != 6 or not code.isdigit():
            raise HTTPException(status_code=400, detail="Please enter a 6-digit verification code")

        profile = self._require_profile(user)
        stored = profile.phone_verification_code
        if not stored or not secrets.compare_digest(stored, code):
            raise HTTPException(status_code=400, detail="The verification code is incorrect")

        expires_at = profile.phone_verification_expires_at
        if expires_at is None or datetime.utcnow() > expires_at:
            raise HTTPException(
                status_code=400,
                detail="The verification code has expired. Please request a new one.",
            )

        profile.phone_verified = True
        profile.phone_verification_code = None
        profile.phone_verification_expires_at = None
        profile.is_available = True
        self.db.commit()

        logger.info(f"✅ Phone verified for user {user.id}")
        return {
            "title": "Success",
            "description": "Phone number verified successfully!",
            "redirect_to": Route.FIND_PLAYERS.value,
        }

    # Discovery

    def find_players(
        self,
        user: Profile,
        sport: str,
        available_only: bool = False,
        skill_min: Optional[int] = None,
        skill_max: Optional[int] = None,
        age_min: Optional[int] = None,
        age_max: Optional[int] = None,
        gender: Optional[str] = None,
        min_rating: Optional[float] = None,
    ) -> list[dict]:
        rows = self.repo.search_players(
            self.db,
            sport.strip().lower(),
            exclude_user_id=user.id,
            available_only=available_only,
            skill_min=skill_min,
            skill_max=skill_max,
            age_min=age_min,
            age_max=age_max,
            gender=None if gender in (None, "", "any") else gender,
            min_rating=min_rating if min_rating and min_rating > 0 else None,
            limit=PLAYER_SEARCH_LIMIT,
        )
        return [
            {
                "user_id": player.user_id,
                "full_name": player.full_name,
                "age": player.age,
                "gender": player.gender,
                "location": player.location,
                "is_available": player.is_available,
                "overall_rating": player.overall_rating,
                "total_games_played": player.total_games_played,
                "preferred_contact": player.preferred_contact,
                "sport": sport_profile.sport,
                "skill_level": sport_profile.skill_level,
                "experience_level": sport_profile.experience_level,
                "preferred_positions": sport_profile.preferred_positions or [],
            }
            for player, sport_profile in rows
        ]
