"""Auth repository - Profile, role and owner records touched by sign-up and sign-in"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Profile, TurfOwner, UserProfile, UserRole


class AuthRepository:
    """Repository for account database operations"""

    @staticmethod
    def get_profile(db: Session, user_id: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.id == user_id).first()

    @staticmethod
    def get_player_profile(db: Session, user_id: str) -> Optional[UserProfile]:
        return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()

    @staticmethod
    def find_account_by_phone(db: Session, phone_number: str) -> Optional[tuple[Profile, UserProfile]]:
        """Match a phone number to the profile holding it and its verification record"""
        row = (
            db.query(Profile, UserProfile)
            .join(UserProfile, UserProfile.user_id == Profile.id)
            .filter(UserProfile.phone_number == phone_number)
            .first()
        )
        return tuple(row) if row else None

    @staticmethod
    def upsert_profile(
        db: Session,
        user_id: str,
        email: Optional[str],
        full_name: Optional[str],
        phone_number: Optional[str],
        role: str,
    ) -> Profile:
        profile = db.query(Profile).filter(Profile.id == user_id).first()
        if profile is None:
            profile = Profile(id=user_id)
            db.add(profile)
        profile.email = email or profile.email
        profile.full_name = full_name or profile.full_name
        profile.phone_number = phone_number or profile.phone_number
        profile.role = role
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def get_turf_owner(db: Session, user_id: str) -> Optional[TurfOwner]:
        return db.query(TurfOwner).filter(TurfOwner.user_id == user_id).first()

    @staticmethod
    def create_turf_owner(db: Session, user_id: str, **owner_data) -> TurfOwner:
        owner = TurfOwner(user_id=user_id, verification_status="pending", **owner_data)
        db.add(owner)
        db.commit()
        db.refresh(owner)
        return owner

    @staticmethod
    def grant_role(db: Session, user_id: str, role: str) -> bool:
        """Record a role grant; returns False when it already existed"""
        exists = (
            db.query(UserRole.id).filter(UserRole.user_id == user_id, UserRole.role == role).first()
        )
        if exists:
            return False
        db.add(UserRole(user_id=user_id, role=role))
        db.commit()
        return True


class DatabaseProfileReader:
    """Profile lookups used to route a user after sign-in"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AuthRepository()

    def fetch_role(self, user_id: str) -> Optional[str]:
        profile = self.repo.get_profile(self.db, user_id)
        return profile.role if profile else None

    def fetch_phone_verified(self, user_id: str) -> Optional[bool]:
        profile = self.repo.get_player_profile(self.db, user_id)
        return profile.phone_verified if profile else None

    def fetch_player_profile(self, user_id: str) -> Optional[UserProfile]:
        return self.repo.get_player_profile(self.db, user_id)
