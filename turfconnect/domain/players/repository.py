"""Player repository - Database operations for player and sports profiles"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import UserProfile, UserSportsProfile


class PlayerRepository:
    """Repository for player profile database operations"""

    @staticmethod
    def get_profile(db: Session, user_id: str) -> Optional[UserProfile]:
        return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()

    @staticmethod
    def save_profile(db: Session, user_id: str, **profile_data) -> UserProfile:
        """Create the player profile or fill in the existing one"""
        profile = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if profile is None:
            profile = UserProfile(user_id=user_id)
            db.add(profile)

        for key, value in profile_data.items():
            if value is not None and hasattr(profile, key):
                setattr(profile, key, value)

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def list_sports(db: Session, user_id: str, active_only: bool = True) -> list[UserSportsProfile]:
        query = db.query(UserSportsProfile).filter(UserSportsProfile.user_id == user_id)
        if active_only:
            query = query.filter(UserSportsProfile.is_active.is_(True))
        return query.order_by(UserSportsProfile.sport).all()

    @staticmethod
    def upsert_sport(
        db: Session, user_id: str, sport: str, skill_level: int, experience_level: str
    ) -> UserSportsProfile:
        sport_profile = (
            db.query(UserSportsProfile)
            .filter(UserSportsProfile.user_id == user_id, UserSportsProfile.sport == sport)
            .first()
        )
        if sport_profile is None:
            sport_profile = UserSportsProfile(user_id=user_id, sport=sport)
            db.add(sport_profile)

        sport_profile.skill_level = skill_level
        sport_profile.experience_level = experience_level
        sport_profile.is_active = True
        return sport_profile

    @staticmethod
    def search_players(
        db: Session,
        sport: str,
        exclude_user_id: Optional[str] = None,
        available_only: bool = False,
        skill_min: Optional[int] = None,
        skill_max: Optional[int] = None,
        age_min: Optional[int] = None,
        age_max: Optional[int] = None,
        gender: Optional[str] = None,
        min_rating: Optional[float] = None,
        limit: int = 20,
    ) -> list[tuple[UserProfile, UserSportsProfile]]:
        query = (
            db.query(UserProfile, UserSportsProfile)
            .join(UserSportsProfile, UserSportsProfile.user_id == UserProfile.user_id)
            .filter(UserSportsProfile.sport == sport, UserSportsProfile.is_active.is_(True))
        )

        if exclude_user_id:
            query = query.filter(UserProfile.user_id != exclude_user_id)
        if available_only:
            query = query.filter(UserProfile.is_available.is_(True))
        # Ranges apply only when both bounds are given
        if skill_min is not None and skill_max is not None:
            query = query.filter(UserSportsProfile.skill_level.between(skill_min, skill_max))
        if age_min is not None and age_max is not None:
            query = query.filter(UserProfile.age.between(age_min, age_max))
        if gender:
            query = query.filter(UserProfile.gender == gender)
        if min_rating:
            query = query.filter(UserProfile.overall_rating >= min_rating)

        return query.order_by(UserProfile.overall_rating.desc()).limit(limit).all()
