"""Admin service - Turf moderation and platform statistics"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...cache import invalidate_turf_listings
from ...models import Turf
from .repository import AdminRepository

logger = logging.getLogger(__name__)


class ApprovalError(Exception):
    """A turf or owner could not be moved to its reviewed state"""


def pending_turf_to_dict(turf: Turf) -> dict:
    return {
        "id": turf.id,
        "owner_id": turf.owner_id,
        "name": turf.name,
        "address": turf.address,
        "area": turf.area,
        "contact_phone": turf.contact_phone,
        "contact_email": turf.contact_email,
        "supported_sports": turf.supported_sports or [],
        "base_price_per_hour": turf.base_price_per_hour,
        "status": turf.status,
        "created_at": turf.created_at,
        "turf_owners": (
            {"business_name": turf.owner.business_name, "owner_name": turf.owner.owner_name}
            if turf.owner
            else None
        ),
    }


class AdminService:
    """Service layer for admin moderation"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdminRepository()

    def list_pending_turfs(self) -> list[dict]:
        return [pending_turf_to_dict(t) for t in self.repo.list_pending_turfs(self.db)]

    def get_stats(self) -> dict:
        return self.repo.count_stats(self.db)

    def review_turf(
        self,
        owner_id: str,
        action: str,
        turf_id: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        """
        Apply an approve/reject decision.

        approve: turf (when given) becomes active and the owner verified.
        reject: turf (when given) becomes rejected and the owner rejected with the reason.
        Raises ApprovalError when a record is missing; nothing is committed in that case.
        """
        logger.info(f"🔍 Processing {action} for turf {turf_id} (owner {owner_id})")
        verb = "approve" if action == "approve" else "reject"

        if turf_id:
            turf = self.repo.get_turf(self.db, turf_id)
            if not turf:
                raise ApprovalError(f"Failed to {verb} turf: turf {turf_id} not found")
            turf.status = "active" if action == "approve" else "rejected"

        owner = self.repo.get_owner(self.db, owner_id)
        if not owner:
            self.db.rollback()
            label = "verify" if action == "approve" else "reject"
            raise ApprovalError(f"Failed to {label} owner: owner {owner_id} not found")

        if action == "approve":
            owner.verification_status = "verified"
            owner.rejection_reason = None
        else:
            owner.verification_status = "rejected"
            owner.rejection_reason = rejection_reason

        self.db.commit()
        invalidate_turf_listings()
        logger.info(f"✅ Turf {turf_id} and owner {owner_id} {action}d successfully")
