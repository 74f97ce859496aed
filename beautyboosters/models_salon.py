from sqlalchemy import JSON, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base, generate_uuid


class SalonProfile(Base):
    __tablename__ = "salon_profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    owner_user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    cvr = Column(String(8), nullable=True)
    address = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    # {"monday": {"open": "09:00", "close": "17:00", "closed": false}, ...}
    opening_hours = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    services = relationship("SalonService", back_populates="salon", cascade="all, delete-orphan")
    employees = relationship(
        "SalonEmployee", back_populates="salon", cascade="all, delete-orphan"
    )
    bookings = relationship("SalonBooking", back_populates="salon", cascade="all, delete-orphan")


class SalonService(Base):
    __tablename__ = "salon_services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    salon_id = Column(String(36), ForeignKey("salon_profiles.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    price = Column(Float, nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    created_at = Column(DateTime, server_default=func.now())

    salon = relationship("SalonProfile", back_populates="services")


class SalonEmployee(Base):
    __tablename__ = "salon_employees"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    salon_id = Column(String(36), ForeignKey("salon_profiles.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    salon = relationship("SalonProfile", back_populates="employees")


class SalonBooking(Base):
    __tablename__ = "salon_bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    salon_id = Column(String(36), ForeignKey("salon_profiles.id"), nullable=False, index=True)
    service_id = Column(String(36), ForeignKey("salon_services.id"), nullable=False)
    employee_id = Column(String(36), ForeignKey("salon_employees.id"), nullable=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=True)
    booking_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    price = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(String(20), default="confirmed", nullable=False)  # confirmed, cancelled
    created_at = Column(DateTime, server_default=func.now())

    salon = relationship("SalonProfile", back_populates="bookings")
