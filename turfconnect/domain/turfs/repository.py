"""Turf repository - Database operations for turfs and their owners"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Turf, TurfOwner


class TurfRepository:
    """Repository for turf database operations"""

    @staticmethod
    def list_active_turfs(
        db: Session, area: Optional[str] = None, search: Optional[str] = None
    ) -> list[Turf]:
        """Active turfs, newest first, optionally narrowed by area or free text"""
        query = db.query(Turf).filter(Turf.status == "active")

        if area:
            query = query.filter(Turf.area.ilike(f"%{area}%"))
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(Turf.name.ilike(pattern), Turf.address.ilike(pattern), Turf.area.ilike(pattern))
            )

        return query.order_by(Turf.created_at.desc()).all()

    @staticmethod
    def get_turf(db: Session, turf_id: str) -> Optional[Turf]:
        return db.query(Turf).filter(Turf.id == turf_id).first()

    @staticmethod
    def get_owner_by_user(db: Session, user_id: str) -> Optional[TurfOwner]:
        return db.query(TurfOwner).filter(TurfOwner.user_id == user_id).first()

    @staticmethod
    def add_owner(db: Session, user_id: str, **owner_data) -> TurfOwner:
        """Stage an owner row in the current transaction; the caller commits"""
        owner = TurfOwner(user_id=user_id, **owner_data)
        db.add(owner)
        db.flush()
        return owner

    @staticmethod
    def list_owner_turfs(db: Session, owner_id: str) -> list[Turf]:
        return (
            db.query(Turf)
            .filter(Turf.owner_id == owner_id)
            .order_by(Turf.created_at.desc())
            .all()
        )

    @staticmethod
    def get_owned_turf(db: Session, turf_id: str, owner_id: str) -> Optional[Turf]:
        return db.query(Turf).filter(Turf.id == turf_id, Turf.owner_id == owner_id).first()

    @staticmethod
    def create_turf(db: Session, owner_id: str, **turf_data) -> Turf:
        turf = Turf(owner_id=owner_id, **turf_data)
        db.add(turf)
        db.commit()
        db.refresh(turf)
        return turf

    @staticmethod
    def update_turf(db: Session, turf: Turf, **updates) -> Turf:
        for key, value in updates.items():
            if value is not None and hasattr(turf, key):
                setattr(turf, key, value)

        db.commit()
        db.refresh(turf)
        return turf

    @staticmethod
    def claim_unowned_turf(db: Session, turf_id: str, owner_id: str) -> bool:
        """
        Assign an owner only if the turf has none, in a single UPDATE.
        Returns False when the turf is missing or someone else got it first.
        Not committed here.
        """
        updated = (
            db.query(Turf)
            .filter(Turf.id == turf_id, Turf.owner_id.is_(None))
            .update({Turf.owner_id: owner_id}, synchronize_session=False)
        )
        return updated == 1
