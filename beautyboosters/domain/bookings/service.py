"""Booking service - slots, booking lifecycle, release and reviews"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import (
    BOOKING_REQUEST_TTL_HOURS,
    DEFAULT_BOOSTER_LOCATION,
    RELEASE_FANOUT_LIMIT,
)
from ...database import generate_uuid
from ...models import ROLE_ADMIN, BoosterAvailability, BoosterProfile, User
from ...models_booking import Booking, BookingReview, BoosterBookingRequest
from ...models_job import Job
from ...shared.address import city_of, same_area
from ...shared.validators import minutes_to_time, sanitize_reason, time_to_minutes
from ..catalog.service import CatalogService
from ..discounts.service import DiscountService
from ..notifications.service import notify, notify_admins
from .repository import BookingRepository
from .schemas import BookingCreate, ReviewCreate

logger = logging.getLogger(__name__)

# Hourly start times offered on the booking page
SLOT_TIMES = [f"{hour:02d}:00" for hour in range(9, 19)]
MAX_DURATION_HOURS = 5

# (minimum hours of notice, share of the amount charged)
CANCELLATION_TIERS = [(24, 0.0), (6, 0.5), (0, 1.0)]


def is_bookable_date(day: date, today: Optional[date] = None) -> bool:
    """Bookings open from tomorrow; Sundays are closed"""
    today = today or date.today()
    return day > today and day.weekday() != 6


def booking_window(start_time: str, duration_hours: float) -> tuple[int, int]:
    start = time_to_minutes(start_time)
    return start, start + int(round(duration_hours * 60))


def overlaps(a: tuple[int, int], b: tuple[int, int]) -> bool:
    return a[0] < b[1] and b[0] < a[1]


def free_slots(blocked: list[tuple[int, int]], duration_hours: int) -> list[str]:
    """Slot grid minus every start whose window touches a blocked range"""
    return [
        slot
        for slot in SLOT_TIMES
        if not any(overlaps(booking_window(slot, duration_hours), b) for b in blocked)
    ]


def cancellation_fee(amount: float, starts_at: datetime, now: Optional[datetime] = None) -> float:
    now = now or datetime.now()
    hours_notice = (starts_at - now).total_seconds() / 3600
    for min_hours, share in CANCELLATION_TIERS:
        if hours_notice >= min_hours:
            return round(amount * share, 2)
    return round(amount, 2)


def booking_starts_at(booking: Booking) -> datetime:
    hours, minutes = booking.booking_time.split(":")
    return datetime.combine(booking.booking_date, datetime.min.time()).replace(
        hour=int(hours), minute=int(minutes)
    )


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    # ------------------------------------------------------------------
    # Lookups and permissions
    # ------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def get_booking_for_user(self, booking_id: str, user: User) -> Booking:
        booking = self.get_booking(booking_id)
        if user.has_role(ROLE_ADMIN) or booking.booster_id == user.id or self._is_customer(booking, user):
            return booking
        raise HTTPException(status_code=404, detail="Booking not found")

    @staticmethod
    def _is_customer(booking: Booking, user: User) -> bool:
        if booking.customer_id and booking.customer_id == user.id:
            return True
        return bool(user.email) and booking.customer_email.lower() == user.email.lower()

    def _get_booster(self, booster_id: str) -> BoosterProfile:
        booster = self.db.query(BoosterProfile).filter(BoosterProfile.id == booster_id).first()
        if not booster:
            raise HTTPException(status_code=404, detail="Booster not found")
        return booster

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _blocked_ranges(
        self, booster_id: str, day: date, exclude_booking_id: Optional[str] = None
    ) -> list[tuple[int, int]]:
        blocked = [
            (time_to_minutes(e.start_time), time_to_minutes(e.end_time))
            for e in self.repo.get_busy_entries_on(self.db, booster_id, day)
            if exclude_booking_id is None or e.job_id != exclude_booking_id
        ]
        blocked.extend(
            booking_window(b.booking_time, b.duration_hours)
            for b in self.repo.get_active_for_booster_on(self.db, booster_id, day, exclude_booking_id)
        )
        return blocked

    def is_slot_free(
        self,
        booster_id: str,
        day: date,
        start_time: str,
        duration_hours: float,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        window = booking_window(start_time, duration_hours)
        return not any(
            overlaps(window, b) for b in self._blocked_ranges(booster_id, day, exclude_booking_id)
        )

    def available_slots(self, booster_id: str, day: date, duration_hours: int = 1) -> list[str]:
        self._get_booster(booster_id)
        if not 1 <= duration_hours <= MAX_DURATION_HOURS:
            raise HTTPException(
                status_code=400, detail=f"Duration must be between 1 and {MAX_DURATION_HOURS} hours"
            )
        if not is_bookable_date(day):
            return []
        return free_slots(self._blocked_ranges(booster_id, day), duration_hours)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_booking(self, data: BookingCreate, user: Optional[User]) -> Booking:
        """Create a pending booking for a booster's free slot"""
        if data.booking_time not in SLOT_TIMES:
            raise HTTPException(status_code=400, detail="Bookings start on the hour between 09:00 and 18:00")
        if not is_bookable_date(data.booking_date):
            raise HTTPException(status_code=400, detail="Bookings are not possible on Sundays, today or past dates")
        if not data.cancellation_policy_accepted:
            raise HTTPException(status_code=400, detail="The cancellation policy must be accepted")

        customer_email = data.customer_email or (user.email if user else None)
        if not customer_email:
            raise HTTPException(status_code=400, detail="Customer email is required")

        booster = self._get_booster(data.booster_id)
        if not booster.is_available:
            raise HTTPException(status_code=400, detail="Booster is not taking bookings")

        if not self.is_slot_free(booster.id, data.booking_date, data.booking_time, data.duration_hours):
            raise HTTPException(status_code=409, detail="This time slot is no longer available")

        service_lines = None
        service_name = data.service_name
        if data.service_lines:
            quote = CatalogService(self.db).quote_cart(data.service_lines)
            price = quote.total_price
            service_lines = [line.model_dump() for line in quote.lines]
            service_name = service_name or ", ".join(line.name for line in quote.lines)
        else:
            price = booster.hourly_rate * data.duration_hours
        if not service_name:
            raise HTTPException(status_code=400, detail="service_name or service_lines is required")

        user_id = user.id if user else None
        booking_id = generate_uuid()
        discount_amount = 0.0
        discount_service = DiscountService(self.db)
        try:
            code = None
            if data.discount_code:
                code, discount_amount = discount_service.validate(
                    data.discount_code, price, user_id, customer_email, lock=True
                )

            booking = Booking(
                id=booking_id,
                customer_id=user_id,
                customer_name=data.customer_name or (user.full_name if user else None),
                customer_email=customer_email,
                customer_phone=data.customer_phone,
                booster_id=booster.id,
                booster_name=booster.name,
                service_name=service_name,
                service_lines=service_lines,
                booking_date=data.booking_date,
                booking_time=data.booking_time,
                duration_hours=data.duration_hours,
                amount=round(price - discount_amount, 2),
                discount_code=code.code if code else None,
                discount_amount=discount_amount,
                location=data.location,
                special_requests=data.special_requests,
                status="pending",
                booster_status="pending",
                cancellation_policy_accepted=True,
            )
            self.db.add(booking)
            self.db.flush()

            if code:
                discount_service.redeem(
                    code, price, discount_amount, booking_id, user_id, customer_email
                )

            notify(
                self.db,
                booster.id,
                "Ny booking",
                f"{service_name} den {data.booking_date} kl. {data.booking_time} ({data.duration_hours} t).",
                "booking_request",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(f"📅 Booking {booking.id} created for booster {booster.id} on {booking.booking_date} {booking.booking_time}")
        return booking

    # ------------------------------------------------------------------
    # Booster response
    # ------------------------------------------------------------------

    def _block_calendar(self, booking: Booking, booster_id: str) -> BoosterAvailability:
        start, end = booking_window(booking.booking_time, booking.duration_hours)
        entry = BoosterAvailability(
            booster_id=booster_id,
            date=booking.booking_date,
            start_time=minutes_to_time(start),
            end_time=minutes_to_time(end),
            status="busy",
            notes=f"Booking: {booking.service_name} - {booking.customer_name or booking.customer_email}",
            job_id=booking.id,
        )
        self.db.add(entry)
        return entry

    def find_alternative_booster(self, booking: Booking, exclude_id: Optional[str]) -> Optional[BoosterProfile]:
        """First available booster in the booking's city who is free at that time"""
        city = city_of(booking.location) or DEFAULT_BOOSTER_LOCATION
        for candidate in self.repo.get_available_boosters(self.db, exclude_id):
            if not same_area(city, candidate.location):
                continue
            if self.is_slot_free(
                candidate.id,
                booking.booking_date,
                booking.booking_time,
                booking.duration_hours,
                exclude_booking_id=booking.id,
            ):
                return candidate
        return None

    def respond(self, booking_id: str, booster: BoosterProfile, action: str) -> dict:
        booking = self.get_booking(booking_id)
        if booking.booster_id != booster.id:
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status != "pending" or booking.booster_status != "pending":
            raise HTTPException(status_code=400, detail="Booking is not awaiting a response")

        if action == "accept":
            booking.status = "confirmed"
            booking.booster_status = "accepted"
            self._block_calendar(booking, booster.id)
            if booking.customer_id:
                notify(
                    self.db,
                    booking.customer_id,
                    "Booking bekræftet",
                    f"{booster.name} har bekræftet din booking den {booking.booking_date} kl. {booking.booking_time}.",
                    "booking_confirmed",
                )
            self.db.commit()
            self.db.refresh(booking)
            logger.info(f"✅ Booking {booking.id} accepted by booster {booster.id}")
            return {"booking": booking, "message": "Booking accepted"}

        booking.booster_status = "rejected"
        booking.assignment_attempts = (booking.assignment_attempts or 0) + 1
        booking.last_assignment_attempt = datetime.utcnow()
        self.db.flush()

        alternative = self.find_alternative_booster(booking, exclude_id=booster.id)
        if alternative:
            booking.booster_id = alternative.id
            booking.booster_name = alternative.name
            booking.booster_status = "pending"
            booking.status = "pending"
            notify(
                self.db,
                alternative.id,
                "Ny booking",
                f"{booking.service_name} den {booking.booking_date} kl. {booking.booking_time}.",
                "booking_request",
            )
            self.db.commit()
            self.db.refresh(booking)
            logger.info(f"🔁 Booking {booking.id} rejected by {booster.id}, reassigned to {alternative.id}")
            return {
                "booking": booking,
                "message": "Booking rejected and sent to another booster",
                "alternative_booster": alternative.name,
            }

        booking.booster_id = None
        booking.booster_name = None
        booking.booster_status = "pending"
        booking.status = "pending_assignment"
        notify_admins(
            self.db,
            "Booking mangler booster",
            f"{booking.service_name} den {booking.booking_date} kl. {booking.booking_time} blev afvist og skal tildeles manuelt.",
            "booking_unassigned",
        )
        self.db.commit()
        self.db.refresh(booking)
        logger.warning(f"⚠️ Booking {booking.id} rejected by {booster.id}, no alternative booster found")
        return {
            "booking": booking,
            "message": "Booking rejected. No alternative booster found",
            "needs_manual_assignment": True,
        }

    def assign_booster(self, booking_id: str, booster_id: str) -> Booking:
        """Admin hands an unassigned or rejected booking to a booster"""
        booking = self.get_booking(booking_id)
        if booking.status in ("cancelled", "completed"):
            raise HTTPException(status_code=400, detail=f"Cannot assign a {booking.status} booking")
        booster = self._get_booster(booster_id)
        if not self.is_slot_free(
            booster.id, booking.booking_date, booking.booking_time, booking.duration_hours, booking.id
        ):
            raise HTTPException(status_code=409, detail="Booster is busy at that time")

        if booking.booster_id and booking.booster_id != booster.id:
            self.repo.delete_booking_availability(self.db, booking.id, booking.booster_id)
        booking.booster_id = booster.id
        booking.booster_name = booster.name
        booking.booster_status = "pending"
        booking.status = "pending"
        self.repo.close_requests(self.db, booking.id)
        notify(
            self.db,
            booster.id,
            "Ny booking",
            f"{booking.service_name} den {booking.booking_date} kl. {booking.booking_time}.",
            "booking_request",
        )
        self.db.commit()
        self.db.refresh(booking)
        return booking

    # ------------------------------------------------------------------
    # Release
    # ------------------------------------------------------------------

    def release(self, booking_id: str, user: User, reason: Optional[str] = None) -> dict:
        """
        A booster gives a booking back.

        Nearby boosters are notified, the first few get a direct request,
        admins are told and the booking is listed as an open job.
        """
        booking = self.get_booking(booking_id)
        is_admin = user.has_role(ROLE_ADMIN)
        if not booking.booster_id:
            raise HTTPException(status_code=400, detail="Booking has no booster to release")
        if not is_admin and booking.booster_id != user.id:
            raise HTTPException(status_code=403, detail="You are not allowed to release this booking")
        if booking.status in ("cancelled", "completed"):
            raise HTTPException(status_code=400, detail=f"Cannot release a {booking.status} booking")

        reason = sanitize_reason(reason)
        releasing = self._get_booster(booking.booster_id)

        try:
            booking.booster_id = None
            booking.booster_name = None
            booking.booster_status = "pending"
            booking.status = "pending_assignment"
            self.repo.delete_booking_availability(self.db, booking.id, releasing.id)

            city = city_of(booking.location) or releasing.location
            eligible = [
                b
                for b in self.repo.get_available_boosters(self.db, exclude_id=releasing.id)
                if same_area(city, b.location)
            ]

            for candidate in eligible:
                notify(
                    self.db,
                    candidate.id,
                    "Ledigt job tilgængeligt",
                    f"Et job for {booking.service_name} den {booking.booking_date} kl. {booking.booking_time} "
                    f"i {booking.location or 'ukendt lokation'} er blevet frigivet. Pris: {booking.amount:.0f} DKK.",
                    "job_released",
                )

            expires_at = datetime.utcnow() + timedelta(hours=BOOKING_REQUEST_TTL_HOURS)
            requested = eligible[:RELEASE_FANOUT_LIMIT]
            for candidate in requested:
                self.db.add(
                    BoosterBookingRequest(
                        booking_id=booking.id,
                        booster_id=candidate.id,
                        status="pending",
                        expires_at=expires_at,
                    )
                )

            notify_admins(
                self.db,
                "Job frigivet",
                f"{releasing.name} har frigivet {booking.service_name} den {booking.booking_date}."
                + (f" Årsag: {reason}" if reason else ""),
                "job_released_admin",
            )

            job = self._open_release_job(booking, reason)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"📤 Booking {booking.id} released by {user.id}: {len(eligible)} boosters notified, "
            f"{len(requested)} requests created"
        )
        return {
            "message": "Booking released and offered to other boosters",
            "notified_boosters": len(eligible),
            "requests_created": len(requested),
            "job_id": job.id,
        }

    def _open_release_job(self, booking: Booking, reason: Optional[str]) -> Job:
        title = f"Booking: {booking.service_name}"
        job = (
            self.db.query(Job)
            .filter(Job.title == title, Job.date_needed == booking.booking_date)
            .first()
        )
        if job:
            job.status = "open"
            job.assigned_booster_id = None
            return job

        description = f"Frigivet booking. Kunde: {booking.customer_name or booking.customer_email}."
        if reason:
            description += f" Årsag: {reason}"
        job = Job(
            title=title,
            description=description,
            service_type=booking.service_name,
            location=booking.location or "Ukendt",
            date_needed=booking.booking_date,
            time_needed=booking.booking_time,
            duration_hours=booking.duration_hours,
            hourly_rate=booking.amount,
            client_name=booking.customer_name,
            client_email=booking.customer_email,
            client_phone=booking.customer_phone,
            status="open",
            boosters_needed=1,
            created_by="release",
        )
        self.db.add(job)
        self.db.flush()
        return job

    # ------------------------------------------------------------------
    # Booking requests
    # ------------------------------------------------------------------

    def list_requests(self, booster: BoosterProfile) -> list[BoosterBookingRequest]:
        return self.repo.get_pending_requests(self.db, booster.id, datetime.utcnow())

    def accept_request(self, request_id: str, booster: BoosterProfile) -> Booking:
        request = self.repo.get_request(self.db, request_id, booster.id)
        if not request:
            raise HTTPException(status_code=404, detail="Booking request not found")
        if request.status != "pending":
            raise HTTPException(status_code=400, detail=f"Booking request is {request.status}")
        if request.expires_at <= datetime.utcnow():
            request.status = "expired"
            self.db.commit()
            raise HTTPException(status_code=400, detail="Booking request has expired")

        booking = request.booking
        if booking.booster_id or booking.status != "pending_assignment":
            raise HTTPException(status_code=409, detail="Booking has already been taken")
        if not self.is_slot_free(
            booster.id, booking.booking_date, booking.booking_time, booking.duration_hours, booking.id
        ):
            raise HTTPException(status_code=409, detail="You are busy at that time")

        booking.booster_id = booster.id
        booking.booster_name = booster.name
        booking.booster_status = "accepted"
        booking.status = "confirmed"
        request.status = "accepted"
        self.repo.close_requests(self.db, booking.id, keep_id=request.id)
        self._block_calendar(booking, booster.id)

        job = (
            self.db.query(Job)
            .filter(
                Job.title == f"Booking: {booking.service_name}",
                Job.date_needed == booking.booking_date,
                Job.status == "open",
            )
            .first()
        )
        if job:
            job.status = "assigned"
            job.assigned_booster_id = booster.id

        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"🤝 Booster {booster.id} took released booking {booking.id}")
        return booking

    def decline_request(self, request_id: str, booster: BoosterProfile) -> dict:
        request = self.repo.get_request(self.db, request_id, booster.id)
        if not request:
            raise HTTPException(status_code=404, detail="Booking request not found")
        if request.status == "pending":
            request.status = "closed"
            self.db.commit()
        return {"message": "Booking request declined"}

    # ------------------------------------------------------------------
    # Cancel and complete
    # ------------------------------------------------------------------

    def cancel(self, booking_id: str, user: User) -> Booking:
        booking = self.get_booking(booking_id)
        if not (user.has_role(ROLE_ADMIN) or self._is_customer(booking, user)):
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status in ("cancelled", "completed"):
            raise HTTPException(status_code=400, detail=f"Booking is already {booking.status}")

        now = datetime.now()
        booking.cancellation_fee = cancellation_fee(booking.amount, booking_starts_at(booking), now)
        booking.status = "cancelled"
        booking.cancelled_at = now
        self.repo.delete_booking_availability(self.db, booking.id)
        self.repo.close_requests(self.db, booking.id)
        if booking.booster_id:
            notify(
                self.db,
                booking.booster_id,
                "Booking aflyst",
                f"{booking.service_name} den {booking.booking_date} kl. {booking.booking_time} er aflyst.",
                "booking_cancelled",
            )
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"❌ Booking {booking.id} cancelled, fee {booking.cancellation_fee}")
        return booking

    def complete(self, booking_id: str, user: User) -> Booking:
        booking = self.get_booking(booking_id)
        if not (user.has_role(ROLE_ADMIN) or booking.booster_id == user.id):
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status != "confirmed":
            raise HTTPException(status_code=400, detail="Only confirmed bookings can be completed")
        booking.status = "completed"
        self.db.commit()
        self.db.refresh(booking)
        return booking

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def list_for_customer(self, user: User) -> list[Booking]:
        return self.repo.get_for_customer(self.db, user.id, user.email)

    def list_for_booster(self, booster: BoosterProfile, status: Optional[str] = None) -> list[Booking]:
        return self.repo.get_for_booster(self.db, booster.id, status)

    def list_all(
        self,
        status: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Booking]:
        return self.repo.get_all(self.db, status, date_from, date_to)

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def review(self, booking_id: str, user: User, data: ReviewCreate) -> BookingReview:
        booking = self.get_booking(booking_id)
        if not self._is_customer(booking, user):
            raise HTTPException(status_code=404, detail="Booking not found")
        if booking.status != "completed":
            raise HTTPException(status_code=400, detail="Only completed bookings can be reviewed")
        if not booking.booster_id:
            raise HTTPException(status_code=400, detail="Booking has no booster to review")
        if booking.review:
            raise HTTPException(status_code=409, detail="Booking has already been reviewed")

        review = BookingReview(
            booking_id=booking.id,
            booster_id=booking.booster_id,
            customer_id=user.id,
            rating=data.rating,
            comment=data.comment,
        )
        self.db.add(review)
        self.db.flush()

        booster = self._get_booster(booking.booster_id)
        average, count = self.repo.rating_summary(self.db, booster.id)
        booster.rating = round(average, 2) if average is not None else None
        booster.review_count = count
        self.db.commit()
        self.db.refresh(review)
        logger.info(f"⭐ Booster {booster.id} rated {data.rating}, now {booster.rating} over {count} reviews")
        return review

    def list_reviews(self, booster_id: str) -> list[BookingReview]:
        self._get_booster(booster_id)
        return self.repo.get_reviews_for_booster(self.db, booster_id)
