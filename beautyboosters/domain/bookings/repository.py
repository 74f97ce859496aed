"""Booking repository - Database operations for bookings, requests and reviews"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import BoosterAvailability, BoosterProfile
from ...models_booking import (
    ACTIVE_BOOKING_STATUSES,
    Booking,
    BookingReview,
    BoosterBookingRequest,
)


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_for_customer(db: Session, user_id: str, email: str) -> list[Booking]:
        conditions = [Booking.customer_id == user_id]
        if email:
            conditions.append(func.lower(Booking.customer_email) == email.lower())
        return (
            db.query(Booking)
            .filter(or_(*conditions))
            .order_by(Booking.booking_date.desc(), Booking.booking_time.desc())
            .all()
        )

    @staticmethod
    def get_for_booster(db: Session, booster_id: str, status: Optional[str] = None) -> list[Booking]:
        query = db.query(Booking).filter(Booking.booster_id == booster_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.booking_date, Booking.booking_time).all()

    @staticmethod
    def get_all(
        db: Session,
        status: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Booking]:
        query = db.query(Booking)
        if status:
            query = query.filter(Booking.status == status)
        if date_from:
            query = query.filter(Booking.booking_date >= date_from)
        if date_to:
            query = query.filter(Booking.booking_date <= date_to)
        return query.order_by(Booking.booking_date.desc(), Booking.booking_time.desc()).all()

    @staticmethod
    def get_active_for_booster_on(
        db: Session, booster_id: str, day: date, exclude_booking_id: Optional[str] = None
    ) -> list[Booking]:
        query = db.query(Booking).filter(
            Booking.booster_id == booster_id,
            Booking.booking_date == day,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.all()

    @staticmethod
    def get_busy_entries_on(db: Session, booster_id: str, day: date) -> list[BoosterAvailability]:
        return (
            db.query(BoosterAvailability)
            .filter(
                BoosterAvailability.booster_id == booster_id,
                BoosterAvailability.date == day,
                BoosterAvailability.status == "busy",
            )
            .all()
        )

    @staticmethod
    def delete_booking_availability(db: Session, booking_id: str, booster_id: Optional[str] = None) -> int:
        query = db.query(BoosterAvailability).filter(BoosterAvailability.job_id == booking_id)
        if booster_id:
            query = query.filter(BoosterAvailability.booster_id == booster_id)
        return query.delete(synchronize_session=False)

    @staticmethod
    def get_available_boosters(db: Session, exclude_id: Optional[str] = None) -> list[BoosterProfile]:
        query = db.query(BoosterProfile).filter(BoosterProfile.is_available.is_(True))
        if exclude_id:
            query = query.filter(BoosterProfile.id != exclude_id)
        return query.order_by(BoosterProfile.created_at, BoosterProfile.name).all()

    # ------------------------------------------------------------------
    # Booking requests
    # ------------------------------------------------------------------

    @staticmethod
    def get_request(db: Session, request_id: str, booster_id: str) -> Optional[BoosterBookingRequest]:
        return (
            db.query(BoosterBookingRequest)
            .filter(
                BoosterBookingRequest.id == request_id,
                BoosterBookingRequest.booster_id == booster_id,
            )
            .first()
        )

    @staticmethod
    def get_pending_requests(db: Session, booster_id: str, now: datetime) -> list[BoosterBookingRequest]:
        return (
            db.query(BoosterBookingRequest)
            .filter(
                BoosterBookingRequest.booster_id == booster_id,
                BoosterBookingRequest.status == "pending",
                BoosterBookingRequest.expires_at > now,
            )
            .order_by(BoosterBookingRequest.expires_at)
            .all()
        )

    @staticmethod
    def close_requests(db: Session, booking_id: str, keep_id: Optional[str] = None) -> int:
        query = db.query(BoosterBookingRequest).filter(
            BoosterBookingRequest.booking_id == booking_id,
            BoosterBookingRequest.status == "pending",
        )
        if keep_id:
            query = query.filter(BoosterBookingRequest.id != keep_id)
        return query.update({BoosterBookingRequest.status: "closed"}, synchronize_session=False)

    @staticmethod
    def expire_requests(db: Session, now: datetime) -> int:
        updated = (
            db.query(BoosterBookingRequest)
            .filter(
                BoosterBookingRequest.status == "pending",
                BoosterBookingRequest.expires_at <= now,
            )
            .update({BoosterBookingRequest.status: "expired"}, synchronize_session=False)
        )
        db.commit()
        return updated

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    @staticmethod
    def get_reviews_for_booster(db: Session, booster_id: str) -> list[BookingReview]:
        return (
            db.query(BookingReview)
            .filter(BookingReview.booster_id == booster_id)
            .order_by(BookingReview.created_at.desc())
            .all()
        )

    @staticmethod
    def rating_summary(db: Session, booster_id: str) -> tuple[Optional[float], int]:
        avg, count = (
            db.query(func.avg(BookingReview.rating), func.count(BookingReview.id))
            .filter(BookingReview.booster_id == booster_id)
            .one()
        )
        return (float(avg) if avg is not None else None), count
