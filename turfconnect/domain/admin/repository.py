"""Admin repository - Platform-wide queries for moderation"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Profile, Turf, TurfOwner


class AdminRepository:
    @staticmethod
    def list_pending_turfs(db: Session) -> list[Turf]:
        return (
            db.query(Turf)
            .options(joinedload(Turf.owner))
            .filter(Turf.status == "pending")
            .order_by(Turf.created_at.desc())
            .all()
        )

    @staticmethod
    def count_stats(db: Session) -> dict:
        return {
            "totalTurfs": db.query(Turf).count(),
            "pendingTurfs": db.query(Turf).filter(Turf.status == "pending").count(),
            "totalUsers": db.query(Profile).count(),
            "totalBookings": db.query(Booking).count(),
        }

    @staticmethod
    def get_turf(db: Session, turf_id: str) -> Optional[Turf]:
        return db.query(Turf).filter(Turf.id == turf_id).first()

    @staticmethod
    def get_owner(db: Session, owner_id: str) -> Optional[TurfOwner]:
        return db.query(TurfOwner).filter(TurfOwner.id == owner_id).first()
