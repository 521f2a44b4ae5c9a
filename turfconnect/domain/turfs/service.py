"""Turf service - Business logic for turf listings, registration and claims"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import build_turf_list_key, cache, invalidate_turf_listings
from ...email_service import send_turf_approval_email
from ...models import Profile, Turf, TurfOwner
from ...navigation import Route
from ..auth.repository import AuthRepository
from .repository import TurfRepository
from .schemas import TurfCreate, TurfResponse

logger = logging.getLogger(__name__)

TURF_LIST_TTL = 120


def owner_to_dict(owner: TurfOwner) -> dict:
    return {
        "id": owner.id,
        "user_id": owner.user_id,
        "business_name": owner.business_name,
        "owner_name": owner.owner_name,
        "business_type": owner.business_type,
        "contact_phone": owner.contact_phone,
        "contact_email": owner.contact_email,
        "address": owner.address,
        "years_of_operation": owner.years_of_operation,
        "verification_status": owner.verification_status,
    }


class TurfService:
    """Service layer for turf business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TurfRepository()

    def list_turfs(
        self, area: Optional[str] = None, sport: Optional[str] = None, search: Optional[str] = None
    ) -> list[dict]:
        """Active turfs for discovery, served from cache when warm"""
        cache_key = build_turf_list_key(area, sport, search)
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        turfs = self.repo.list_active_turfs(self.db, area=area, search=search)
        if sport:
            wanted = sport.lower()
            turfs = [t for t in turfs if wanted in [s.lower() for s in (t.supported_sports or [])]]

        result = [TurfResponse.model_validate(t).model_dump(mode="json") for t in turfs]
        cache.set(cache_key, result, TURF_LIST_TTL)
        return result

    def get_turf(self, turf_id: str) -> Turf:
        turf = self.repo.get_turf(self.db, turf_id)
        if not turf:
            raise HTTPException(status_code=404, detail="Turf not found")
        return turf

    def get_owner(self, user: Profile) -> TurfOwner:
        owner = self.repo.get_owner_by_user(self.db, user.id)
        if not owner:
            raise HTTPException(status_code=404, detail="Owner profile not found")
        return owner

    def get_owned_turf(self, turf_id: str, user: Profile) -> Turf:
        owner = self.get_owner(user)
        turf = self.repo.get_owned_turf(self.db, turf_id, owner.id)
        if not turf:
            raise HTTPException(status_code=404, detail="Turf not found")
        return turf

    def list_owner_turfs(self, user: Profile) -> list[Turf]:
        owner = self.get_owner(user)
        return self.repo.list_owner_turfs(self.db, owner.id)

    async def create_turf(self, data: TurfCreate, user: Profile) -> Turf:
        """Register a turf as pending and notify the admin; notification failures are ignored"""
        owner = self.get_owner(user)
        logger.info(f"📥 Creating turf '{data.name}' for owner {owner.id}")

        turf = self.repo.create_turf(
            self.db,
            owner.id,
            name=data.name.strip(),
            description=data.description or None,
            address=data.address.strip(),
            area=data.area.strip(),
            contact_phone=data.contactPhone or None,
            contact_email=data.contactEmail or None,
            supported_sports=data.supportedSports,
            amenities=data.amenities,
            surface_type=data.surfaceType or None,
            capacity=data.capacity,
            cover_image_url=data.coverImageUrl or (data.images[0] if data.images else None),
            images=data.images,
            base_price_per_hour=data.basePricePerHour,
            weekend_premium_percentage=data.weekendPremiumPercentage,
            peak_hours_premium_percentage=data.peakHoursPremiumPercentage,
            peak_hours_start=data.peakHoursStart,
            peak_hours_end=data.peakHoursEnd,
            status="pending",
        )

        try:
            await send_turf_approval_email(
                TurfResponse.model_validate(turf).model_dump(mode="json"), owner_to_dict(owner)
            )
        except Exception as e:
            logger.error(f"❌ Failed to send approval email for turf {turf.id}: {e}")

        return turf

    def update_status(self, turf_id: str, status: str, user: Profile) -> Turf:
        turf = self.get_owned_turf(turf_id, user)
        if turf.status in ("pending", "rejected"):
            raise HTTPException(status_code=400, detail="Turf is awaiting admin approval")

        turf = self.repo.update_turf(self.db, turf, status=status)
        invalidate_turf_listings()
        logger.info(f"✅ Turf {turf_id} status set to {status}")
        return turf

    def update_price(self, turf_id: str, price: float, user: Profile) -> Turf:
        turf = self.get_owned_turf(turf_id, user)
        turf = self.repo.update_turf(self.db, turf, base_price_per_hour=price)
        invalidate_turf_listings()
        return turf

    def claim_turf(self, turf_id: str, user: Profile) -> dict:
        """Take ownership of an unclaimed turf and grant the owner role"""
        owner = self.repo.get_owner_by_user(self.db, user.id)
        if owner is None:
            display_name = user.full_name or user.email or "Turf Owner"
            owner = self.repo.add_owner(
                self.db,
                user.id,
                business_name=display_name,
                owner_name=display_name,
                contact_email=user.email,
                contact_phone=user.phone_number,
            )

        # The staged owner row only survives a successful claim
        if not self.repo.claim_unowned_turf(self.db, turf_id, owner.id):
            self.db.rollback()
            turf = self.repo.get_turf(self.db, turf_id)
            if not turf:
                raise HTTPException(status_code=404, detail="Turf ID not found. Please check and try again.")
            raise HTTPException(status_code=409, detail="This turf has already been claimed by another owner.")
        self.db.commit()

        turf = self.get_turf(turf_id)

        AuthRepository.grant_role(self.db, user.id, "turf_owner")
        if user.role != "turf_owner":
            user.role = "turf_owner"
            self.db.commit()

        invalidate_turf_listings()
        logger.info(f"✅ Turf {turf_id} claimed by owner {owner.id}")
        return {
            "message": f"You have successfully claimed {turf.name}",
            "turf_id": turf.id,
            "redirect_to": f"{Route.OWNER_DASHBOARD.value}?turf_id={turf.id}",
        }
