"""Admin domain schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, model_validator


class TurfApprovalRequest(BaseModel):
    """Approve or reject a turf registration and its owner"""

    turfId: Optional[str] = None
    ownerId: str
    action: Literal["approve", "reject"]
    rejectionReason: Optional[str] = None

    @model_validator(mode="after")
    def strip_reason(self):
        if self.rejectionReason is not None:
            self.rejectionReason = self.rejectionReason.strip() or None
        return self


class PendingTurfOwner(BaseModel):
    business_name: str
    owner_name: str


class PendingTurfResponse(BaseModel):
    id: str
    owner_id: Optional[str] = None
    name: str
    address: str
    area: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    supported_sports: Optional[list[str]] = None
    base_price_per_hour: float
    status: str
    created_at: Optional[datetime] = None
    turf_owners: Optional[PendingTurfOwner] = None


class PlatformStatsResponse(BaseModel):
    totalTurfs: int
    pendingTurfs: int
    totalUsers: int
    totalBookings: int
