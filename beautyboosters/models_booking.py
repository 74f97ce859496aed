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

# Statuses that hold a booster's time slot
ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=True)
    booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=True, index=True)
    booster_name = Column(String(255), nullable=True)
    service_name = Column(String(255), nullable=False)
    # Cart lines as quoted at booking time
    service_lines = Column(JSON, nullable=True)
    booking_date = Column(Date, nullable=False, index=True)
    booking_time = Column(String(5), nullable=False)  # HH:MM
    duration_hours = Column(Float, nullable=False, default=1)
    amount = Column(Float, nullable=False)
    discount_code = Column(String(50), nullable=True)
    discount_amount = Column(Float, nullable=False, default=0)
    location = Column(String(500), nullable=True)
    special_requests = Column(Text, nullable=True)
    # pending, confirmed, pending_assignment, cancelled, completed
    status = Column(String(30), default="pending", nullable=False)
    booster_status = Column(String(20), default="pending", nullable=False)  # pending, accepted, rejected
    assignment_attempts = Column(Integer, default=0, nullable=False)
    last_assignment_attempt = Column(DateTime, nullable=True)
    cancellation_policy_accepted = Column(Boolean, default=False)
    cancellation_fee = Column(Float, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    requests = relationship(
        "BoosterBookingRequest", back_populates="booking", cascade="all, delete-orphan"
    )
    review = relationship("BookingReview", back_populates="booking", uselist=False)


class BoosterBookingRequest(Base):
    __tablename__ = "booster_booking_requests"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=False, index=True)
    status = Column(String(20), default="pending", nullable=False)  # pending, accepted, closed, expired
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    booking = relationship("Booking", back_populates="requests")


class BookingReview(Base):
    __tablename__ = "booking_reviews"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booking_id = Column(String(36), ForeignKey("bookings.id"), unique=True, nullable=False)
    booster_id = Column(String(36), ForeignKey("booster_profiles.id"), nullable=False, index=True)
    customer_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    booking = relationship("Booking", back_populates="review")


class BookingReminder(Base):
    __tablename__ = "booking_reminders"
    __table_args__ = (UniqueConstraint("booking_id", "type", name="uq_booking_reminder_type"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)
    payload = Column(JSON, nullable=True)
    scheduled_at = Column(DateTime, nullable=False)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class DiscountCode(Base):
    __tablename__ = "discount_codes"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    code = Column(String(50), nullable=False, index=True)  # Stored upper-case
    type = Column(String(10), nullable=False, default="percent")  # percent, fixed
    amount = Column(Float, nullable=False)
    min_amount = Column(Float, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="DKK")
    active = Column(Boolean, default=True, nullable=False)
    valid_from = Column(DateTime, nullable=True)
    valid_to = Column(DateTime, nullable=True)
    max_redemptions = Column(Integer, nullable=True)  # null = unlimited
    per_user_limit = Column(Integer, nullable=True)  # null = unlimited
    # null = platform-wide code managed by admins
    salon_id = Column(String(36), ForeignKey("salon_profiles.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())

    redemptions = relationship(
        "DiscountRedemption", back_populates="discount_code", cascade="all, delete-orphan"
    )

    @property
    def redemption_count(self) -> int:
        return len(self.redemptions)


class DiscountRedemption(Base):
    __tablename__ = "discount_redemptions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    discount_code_id = Column(
        String(36), ForeignKey("discount_codes.id"), nullable=False, index=True
    )
    user_id = Column(String(36), nullable=True, index=True)
    # Guest checkouts are counted per email
    email = Column(String(255), nullable=True, index=True)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    salon_booking_id = Column(String(36), ForeignKey("salon_bookings.id"), nullable=True)
    order_amount = Column(Float, nullable=False)
    discount_amount = Column(Float, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    discount_code = relationship("DiscountCode", back_populates="redemptions")
