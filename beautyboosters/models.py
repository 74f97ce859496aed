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

from .database import Base, generate_uuid

ROLE_ADMIN = "admin"
ROLE_BOOSTER = "booster"
ROLE_SALON = "salon"
ROLE_CUSTOMER = "customer"


class User(Base):
    __tablename__ = "users"

    # Same id as the auth provider's "sub" claim
    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), index=True, nullable=False, default="")
    full_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")
    booster_profile = relationship("BoosterProfile", back_populates="user", uselist=False)

    @property
    def role_names(self) -> set[str]:
        return {r.role for r in self.roles}

    def has_role(self, role: str) -> bool:
        return role in self.role_names


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_role"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)  # admin, booster, salon, customer
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="roles")


class BoosterProfile(Base):
    __tablename__ = "booster_profiles"

    # Booster profile id is the booster's user id
    id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    specialties = Column(JSON, default=list, nullable=False)
    location = Column(String(255), nullable=False)
    hourly_rate = Column(Float, nullable=False)
    rating = Column(Float, nullable=True)
    review_count = Column(Integer, default=0)
    years_experience = Column(Integer, nullable=True)
    portfolio_image_url = Column(String(500), nullable=True)
    is_available = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="booster_profile")
    availability = relationship(
        "BoosterAvailability", back_populates="booster", cascade="all, delete-orphan"
    )


class BoosterAvailability(Base):
    __tablename__ = "booster_availability"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), default="available", nullable=False)  # available, busy
    notes = Column(Text, nullable=True)
    # Booking or job that blocks this slot
    job_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())

    booster = relationship("BoosterProfile", back_populates="availability")


class CompetenceTag(Base):
    __tablename__ = "competence_tags"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), unique=True, nullable=False)
    category = Column(String(100), nullable=False, default="general")
    created_at = Column(DateTime, server_default=func.now())


class BoosterApplication(Base):
    __tablename__ = "booster_applications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    city = Column(String(255), nullable=True)
    skills = Column(JSON, default=list, nullable=False)
    years_experience = Column(Integer, nullable=True)
    business_type = Column(String(20), nullable=False, default="b_income")  # cvr, b_income
    cvr = Column(String(8), nullable=True)
    portfolio_links = Column(JSON, default=list, nullable=True)
    motivation = Column(Text, nullable=True)
    status = Column(String(20), default="pending", nullable=False)  # pending, approved, rejected
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(String(36), nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    recipient_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    job_id = Column(String(36), nullable=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    read_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    client_type = Column(String(20), nullable=False, default="privat")  # privat, virksomhed
    price = Column(Float, nullable=False, default=0)  # 0 = price on request
    duration_minutes = Column(Integer, nullable=False, default=60)
    description = Column(Text, nullable=True)
    # {"1": 1999, "2": 3798, ...} - total price by number of people
    group_pricing = Column(JSON, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
