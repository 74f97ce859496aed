"""Salon router - salon owner back office and public salon booking"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import ROLE_SALON, User
from ...models_salon import SalonProfile
from ...rate_limiter import create_rate_limiter
from ..discounts.schemas import DiscountCodeCreate, DiscountCodeResponse, DiscountCodeUpdate
from ..discounts.service import DiscountService
from .schemas import (
    EmployeeCreate,
    EmployeeResponse,
    OpeningHours,
    SalonBookingCreate,
    SalonBookingResponse,
    SalonPublicResponse,
    SalonResponse,
    SalonServiceCreate,
    SalonServiceResponse,
    SalonServiceUpdate,
    SalonSignup,
    SalonUpdate,
)
from .service import SalonManagementService

router = APIRouter(prefix="/salons", tags=["Salons"])

rate_limit_salon_booking = create_rate_limiter(limit=10, window_seconds=60, key_prefix="salon_booking")


def get_salon_service(db: Session = Depends(get_db)) -> SalonManagementService:
    """Dependency injection for SalonManagementService"""
    return SalonManagementService(db)


async def get_current_salon(
    user: User = Depends(require_roles(ROLE_SALON)),
    service: SalonManagementService = Depends(get_salon_service),
) -> SalonProfile:
    """Salon owned by the signed-in user"""
    return service.get_for_owner(user)


@router.post("/signup", response_model=SalonResponse, status_code=201)
async def signup_salon(
    data: SalonSignup,
    current_user: User = Depends(get_current_user),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.signup(data, current_user)


# ============================================================================
# OWNER
# ============================================================================


@router.get("/me", response_model=SalonResponse)
async def get_own_salon(salon: SalonProfile = Depends(get_current_salon)):
    return salon


@router.patch("/me", response_model=SalonResponse)
async def update_own_salon(
    data: SalonUpdate,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.update_profile(salon, data)


@router.put("/me/opening-hours", response_model=SalonResponse)
async def set_opening_hours(
    data: OpeningHours,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.set_opening_hours(salon, data)


@router.get("/me/services", response_model=list[SalonServiceResponse])
async def list_salon_services(
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.list_services(salon)


@router.post("/me/services", response_model=SalonServiceResponse, status_code=201)
async def add_salon_service(
    data: SalonServiceCreate,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.add_service(salon, data)


@router.patch("/me/services/{service_id}", response_model=SalonServiceResponse)
async def update_salon_service(
    service_id: str,
    data: SalonServiceUpdate,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.update_service(salon, service_id, data)


@router.delete("/me/services/{service_id}")
async def delete_salon_service(
    service_id: str,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.delete_service(salon, service_id)


@router.get("/me/employees", response_model=list[EmployeeResponse])
async def list_employees(
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.list_employees(salon)


@router.post("/me/employees", response_model=EmployeeResponse, status_code=201)
async def add_employee(
    data: EmployeeCreate,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.add_employee(salon, data)


@router.delete("/me/employees/{employee_id}")
async def remove_employee(
    employee_id: str,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.remove_employee(salon, employee_id)


@router.get("/me/bookings", response_model=list[SalonBookingResponse])
async def list_salon_bookings(
    day: Optional[date] = Query(None, alias="date"),
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.list_bookings(salon, day)


@router.post("/me/bookings/{booking_id}/cancel", response_model=SalonBookingResponse)
async def cancel_salon_booking(
    booking_id: str,
    salon: SalonProfile = Depends(get_current_salon),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.cancel_booking(salon, booking_id)


# ============================================================================
# OWNER DISCOUNT CODES
# ============================================================================


@router.get("/me/discount-codes", response_model=list[DiscountCodeResponse])
async def list_salon_discount_codes(
    salon: SalonProfile = Depends(get_current_salon),
    db: Session = Depends(get_db),
):
    return DiscountService(db, salon_id=salon.id).list_codes()


@router.post("/me/discount-codes", response_model=DiscountCodeResponse, status_code=201)
async def create_salon_discount_code(
    data: DiscountCodeCreate,
    salon: SalonProfile = Depends(get_current_salon),
    db: Session = Depends(get_db),
):
    return DiscountService(db, salon_id=salon.id).create_code(data)


@router.patch("/me/discount-codes/{code_id}", response_model=DiscountCodeResponse)
async def update_salon_discount_code(
    code_id: str,
    data: DiscountCodeUpdate,
    salon: SalonProfile = Depends(get_current_salon),
    db: Session = Depends(get_db),
):
    return DiscountService(db, salon_id=salon.id).update_code(code_id, data)


@router.delete("/me/discount-codes/{code_id}")
async def delete_salon_discount_code(
    code_id: str,
    salon: SalonProfile = Depends(get_current_salon),
    db: Session = Depends(get_db),
):
    return DiscountService(db, salon_id=salon.id).delete_code(code_id)


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("/{salon_id}", response_model=SalonPublicResponse)
async def get_salon(salon_id: str, service: SalonManagementService = Depends(get_salon_service)):
    return service.get_salon(salon_id)


@router.post("/{salon_id}/bookings", response_model=SalonBookingResponse, status_code=201)
async def create_salon_booking(
    salon_id: str,
    data: SalonBookingCreate,
    _: None = Depends(rate_limit_salon_booking),
    service: SalonManagementService = Depends(get_salon_service),
):
    return service.create_booking(salon_id, data)
