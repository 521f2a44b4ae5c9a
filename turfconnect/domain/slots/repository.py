"""Slot repository - Database operations for turf slots"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import TurfSlot


class SlotRepository:
    """Repository for turf slot database operations"""

    @staticmethod
    def list_slots(db: Session, turf_id: str, available_only: bool = False) -> list[TurfSlot]:
        query = db.query(TurfSlot).filter(TurfSlot.turf_id == turf_id)
        if available_only:
            query = query.filter(TurfSlot.is_available.is_(True))
        return query.order_by(TurfSlot.day_of_week, TurfSlot.start_time).all()

    @staticmethod
    def get_slot(db: Session, slot_id: str) -> Optional[TurfSlot]:
        return db.query(TurfSlot).filter(TurfSlot.id == slot_id).first()

    @staticmethod
    def create_slot(db: Session, turf_id: str, **slot_data) -> TurfSlot:
        slot = TurfSlot(turf_id=turf_id, **slot_data)
        db.add(slot)
        db.commit()
        db.refresh(slot)
        return slot

    @staticmethod
    def update_slot(db: Session, slot: TurfSlot, **updates) -> TurfSlot:
        for key, value in updates.items():
            if value is not None and hasattr(slot, key):
                setattr(slot, key, value)

        db.commit()
        db.refresh(slot)
        return slot

    @staticmethod
    def delete_slot(db: Session, slot: TurfSlot) -> None:
        db.delete(slot)
        db.commit()
