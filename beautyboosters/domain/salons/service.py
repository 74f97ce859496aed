"""Salon service - salon signup, catalog, team, opening hours and bookings"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import ROLE_SALON, User, UserRole
from ...models_salon import SalonBooking, SalonEmployee, SalonProfile, SalonService
from ...shared.validators import minutes_to_time, time_to_minutes
from ..discounts.service import DiscountService
from .schemas import (
    WEEKDAYS,
    EmployeeCreate,
    OpeningHours,
    SalonBookingCreate,
    SalonServiceCreate,
    SalonServiceUpdate,
    SalonSignup,
    SalonUpdate,
)

logger = logging.getLogger(__name__)


def fits_opening_hours(opening_hours: Optional[dict], day: date, start: int, end: int) -> bool:
    """True when [start, end) minutes fall inside that weekday's hours"""
    if not opening_hours:
        return False
    hours = opening_hours.get(WEEKDAYS[day.weekday()])
    if not hours or hours.get("closed") or not hours.get("open") or not hours.get("close"):
        return False
    return time_to_minutes(hours["open"]) <= start and end <= time_to_minutes(hours["close"])


class SalonManagementService:
    """Service layer for salon owners and public salon bookings"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def signup(self, data: SalonSignup, user: User) -> SalonProfile:
        if self.db.query(SalonProfile).filter(SalonProfile.owner_user_id == user.id).first():
            raise HTTPException(status_code=409, detail="You already have a salon")

        salon = SalonProfile(owner_user_id=user.id, **data.model_dump())
        salon.email = salon.email or user.email
        self.db.add(salon)
        if not user.has_role(ROLE_SALON):
            self.db.add(UserRole(user_id=user.id, role=ROLE_SALON))
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(salon)
        logger.info(f"💇 Salon {salon.id} ({salon.name}) signed up by {user.email}")
        return salon

    def get_for_owner(self, user: User) -> SalonProfile:
        salon = self.db.query(SalonProfile).filter(SalonProfile.owner_user_id == user.id).first()
        if not salon:
            raise HTTPException(status_code=404, detail="Salon not found")
        return salon

    def get_salon(self, salon_id: str) -> SalonProfile:
        salon = self.db.query(SalonProfile).filter(SalonProfile.id == salon_id).first()
        if not salon:
            raise HTTPException(status_code=404, detail="Salon not found")
        return salon

    def update_profile(self, salon: SalonProfile, data: SalonUpdate) -> SalonProfile:
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(salon, key, value)
        self.db.commit()
        self.db.refresh(salon)
        return salon

    def set_opening_hours(self, salon: SalonProfile, data: OpeningHours) -> SalonProfile:
        salon.opening_hours = {day: hours.model_dump() for day, hours in data.hours.items()}
        self.db.commit()
        self.db.refresh(salon)
        return salon

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def _get_service(self, salon: SalonProfile, service_id: str) -> SalonService:
        service = (
            self.db.query(SalonService)
            .filter(SalonService.id == service_id, SalonService.salon_id == salon.id)
            .first()
        )
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def list_services(self, salon: SalonProfile) -> list[SalonService]:
        return list(salon.services)

    def add_service(self, salon: SalonProfile, data: SalonServiceCreate) -> SalonService:
        service = SalonService(salon_id=salon.id, **data.model_dump())
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service

    def update_service(self, salon: SalonProfile, service_id: str, data: SalonServiceUpdate) -> SalonService:
        service = self._get_service(salon, service_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(service, key, value)
        self.db.commit()
        self.db.refresh(service)
        return service

    def delete_service(self, salon: SalonProfile, service_id: str) -> dict:
        service = self._get_service(salon, service_id)
        in_use = (
            self.db.query(SalonBooking)
            .filter(SalonBooking.service_id == service.id, SalonBooking.status == "confirmed")
            .first()
        )
        if in_use:
            raise HTTPException(status_code=400, detail="Service has upcoming bookings")
        self.db.delete(service)
        self.db.commit()
        return {"message": "Service deleted"}

    # ------------------------------------------------------------------
    # Team
    # ------------------------------------------------------------------

    def list_employees(self, salon: SalonProfile) -> list[SalonEmployee]:
        return list(salon.employees)

    def add_employee(self, salon: SalonProfile, data: EmployeeCreate) -> SalonEmployee:
        employee = SalonEmployee(salon_id=salon.id, **data.model_dump())
        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def remove_employee(self, salon: SalonProfile, employee_id: str) -> dict:
        employee = (
            self.db.query(SalonEmployee)
            .filter(SalonEmployee.id == employee_id, SalonEmployee.salon_id == salon.id)
            .first()
        )
        if not employee:
            raise HTTPException(status_code=404, detail="Employee not found")
        self.db.query(SalonBooking).filter(SalonBooking.employee_id == employee.id).update(
            {SalonBooking.employee_id: None}, synchronize_session=False
        )
        self.db.delete(employee)
        self.db.commit()
        return {"message": "Employee removed"}

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    def list_bookings(self, salon: SalonProfile, day: Optional[date] = None) -> list[SalonBooking]:
        query = self.db.query(SalonBooking).filter(SalonBooking.salon_id == salon.id)
        if day:
            query = query.filter(SalonBooking.booking_date == day)
        return query.order_by(SalonBooking.booking_date, SalonBooking.start_time).all()

    def cancel_booking(self, salon: SalonProfile, booking_id: str) -> SalonBooking:
        booking = (
            self.db.query(SalonBooking)
            .filter(SalonBooking.id == booking_id, SalonBooking.salon_id == salon.id)
            .first()
        )
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        booking.status = "cancelled"
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def create_booking(self, salon_id: str, data: SalonBookingCreate) -> SalonBooking:
        """Public booking of a salon service inside the salon's opening hours"""
        salon = self.get_salon(salon_id)
        service = self._get_service(salon, data.service_id)

        if data.employee_id:
            employee = (
                self.db.query(SalonEmployee)
                .filter(SalonEmployee.id == data.employee_id, SalonEmployee.salon_id == salon.id)
                .first()
            )
            if not employee:
                raise HTTPException(status_code=404, detail="Employee not found")

        if data.booking_date < date.today():
            raise HTTPException(status_code=400, detail="Cannot book in the past")

        start = time_to_minutes(data.start_time)
        end = start + service.duration_minutes
        if not fits_opening_hours(salon.opening_hours, data.booking_date, start, end):
            raise HTTPException(status_code=400, detail="The salon is closed at that time")

        if data.employee_id:
            taken = (
                self.db.query(SalonBooking)
                .filter(
                    SalonBooking.employee_id == data.employee_id,
                    SalonBooking.booking_date == data.booking_date,
                    SalonBooking.status == "confirmed",
                )
                .all()
            )
            for other in taken:
                if start < time_to_minutes(other.end_time) and time_to_minutes(other.start_time) < end:
                    raise HTTPException(status_code=409, detail="This time slot is no longer available")

        price = service.price
        discounts = DiscountService(self.db, salon_id=salon.id)
        try:
            code = None
            discount = 0.0
            if data.discount_code:
                code, discount = discounts.validate(
                    data.discount_code, price, email=data.customer_email, lock=True
                )
            booking = SalonBooking(
                salon_id=salon.id,
                service_id=service.id,
                employee_id=data.employee_id,
                customer_name=data.customer_name,
                customer_email=data.customer_email,
                customer_phone=data.customer_phone,
                booking_date=data.booking_date,
                start_time=data.start_time,
                end_time=minutes_to_time(end),
                price=round(price - discount, 2),
                notes=data.notes,
                status="confirmed",
            )
            self.db.add(booking)
            self.db.flush()
            if code:
                discounts.redeem(
                    code, price, discount, email=data.customer_email, salon_booking_id=booking.id
                )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(booking)
        logger.info(f"💇 Salon booking {booking.id} at {salon.name} on {booking.booking_date} {booking.start_time}")
        return booking
