"""Admin router - Moderation endpoints restricted to platform admins"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import Profile
from .schemas import PendingTurfResponse, PlatformStatsResponse, TurfApprovalRequest
from .service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.get("/turfs/pending", response_model=list[PendingTurfResponse])
async def list_pending_turfs(
    _: Profile = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Turfs awaiting review, newest first, with the owner's business name"""
    return service.list_pending_turfs()


@router.get("/stats", response_model=PlatformStatsResponse)
async def get_stats(
    _: Profile = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.get_stats()


@router.post("/turfs/approval")
async def review_turf(
    data: TurfApprovalRequest,
    admin: Profile = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Approve or reject a turf registration"""
    try:
        service.review_turf(
            owner_id=data.ownerId,
            action=data.action,
            turf_id=data.turfId,
            rejection_reason=data.rejectionReason,
        )
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Error processing approval by admin {admin.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


__all__ = ["router"]
