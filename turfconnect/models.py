import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_uuid():
    """Generate a string UUID primary key"""
    return str(uuid.uuid4())


class Profile(Base):
    """Account profile keyed by the auth platform user id"""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, index=True)
    email = Column(String(255), index=True, nullable=True)
    full_name = Column(String(255), nullable=True)
    phone_number = Column(String(20), nullable=True)
    role = Column(String(20), default="customer", nullable=False)  # customer, turf_owner, admin
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    player_profile = relationship("UserProfile", back_populates="profile", uselist=False)
    turf_owner = relationship("TurfOwner", back_populates="profile", uselist=False)
    bookings = relationship("Booking", back_populates="user")


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class UserProfile(Base):
    """Player profile used for matchmaking and phone verification"""

    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    phone_number = Column(String(20), nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(String(20), nullable=True)
    location = Column(String(255), nullable=True)
    max_travel_distance = Column(Integer, default=10)  # km
    whatsapp_number = Column(String(20), nullable=True)
    preferred_contact = Column(String(20), default="phone")  # phone, whatsapp, both
    is_available = Column(Boolean, default=True, nullable=False)
    overall_rating = Column(Float, default=0)
    total_games_played = Column(Integer, default=0)
    phone_verified = Column(Boolean, default=False, nullable=False)
    phone_verification_code = Column(String(6), nullable=True)
    phone_verification_expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="player_profile")


class UserSportsProfile(Base):
    __tablename__ = "user_sports_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    sport = Column(String(50), nullable=False)
    skill_level = Column(Integer, default=1)  # 1=Beginner .. 4=Expert
    experience_level = Column(String(20), nullable=True)
    preferred_positions = Column(JSON, default=list)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class TurfOwner(Base):
    __tablename__ = "turf_owners"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), unique=True, nullable=False, index=True)
    business_name = Column(String(255), nullable=False)
    owner_name = Column(String(255), nullable=False)
    business_type = Column(String(20), default="individual")  # individual, partnership, company
    contact_phone = Column(String(20), nullable=True)
    contact_email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    years_of_operation = Column(Integer, nullable=True)
    verification_status = Column(String(20), default="pending", nullable=False)  # pending, verified, rejected
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    profile = relationship("Profile", back_populates="turf_owner")
    turfs = relationship("Turf", back_populates="owner")


class Turf(Base):
    __tablename__ = "turfs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    # Null until an owner registers or claims the turf
    owner_id = Column(String(36), ForeignKey("turf_owners.id"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(Text, nullable=False)
    area = Column(String(255), nullable=True, index=True)
    contact_phone = Column(String(20), nullable=True)
    contact_email = Column(String(255), nullable=True)
    supported_sports = Column(JSON, default=list)
    amenities = Column(JSON, default=list)
    surface_type = Column(String(50), nullable=True)
    capacity = Column(Integer, nullable=True)
    cover_image_url = Column(String(500), nullable=True)
    images = Column(JSON, default=list)
    base_price_per_hour = Column(Float, nullable=False, default=0)
    weekend_premium_percentage = Column(Float, default=0)
    peak_hours_premium_percentage = Column(Float, default=0)
    peak_hours_start = Column(String(5), nullable=True)  # HH:MM
    peak_hours_end = Column(String(5), nullable=True)
    # pending, active, rejected, inactive, maintenance
    status = Column(String(20), default="pending", nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("TurfOwner", back_populates="turfs")
    slots = relationship("TurfSlot", back_populates="turf", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="turf")
    reviews = relationship("Review", back_populates="turf")


class TurfSlot(Base):
    __tablename__ = "turf_slots"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    turf_id = Column(String(36), ForeignKey("turfs.id"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    price = Column(Float, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    turf = relationship("Turf", back_populates="slots")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    turf_id = Column(String(36), ForeignKey("turfs.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    slot_id = Column(String(36), ForeignKey("turf_slots.id"), nullable=True)
    booking_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    total_hours = Column(Float, nullable=False)
    base_price = Column(Float, nullable=False)
    premium_charges = Column(Float, default=0)
    total_amount = Column(Float, nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending, confirmed, completed, cancelled
    payment_status = Column(String(20), default="pending", nullable=False)  # pending, paid, refunded, failed
    player_name = Column(String(255), nullable=True)
    player_phone = Column(String(20), nullable=True)
    player_email = Column(String(255), nullable=True)
    special_requests = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    turf = relationship("Turf", back_populates="bookings")
    user = relationship("Profile", back_populates="bookings")


class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    turf_id = Column(String(36), ForeignKey("turfs.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    turf = relationship("Turf", back_populates="reviews")
    user = relationship("Profile")
