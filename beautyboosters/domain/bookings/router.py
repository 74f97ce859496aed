"""Booking router - customer checkout, booster responses and admin management"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_booster, get_current_user, get_optional_user, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, ROLE_BOOSTER, BoosterProfile, User
from ...rate_limiter import create_rate_limiter
from .schemas import (
    BookingAssign,
    BookingCreate,
    BookingRelease,
    BookingReleaseResult,
    BookingRequestResponse,
    BookingRespond,
    BookingRespondResult,
    BookingResponse,
    ReviewCreate,
    ReviewResponse,
    SlotsResponse,
)
from .service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])

rate_limit_checkout = create_rate_limiter(limit=10, window_seconds=60, key_prefix="checkout")


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


# ============================================================================
# PUBLIC / CUSTOMER
# ============================================================================


@router.get("/slots", response_model=SlotsResponse)
async def get_available_slots(
    booster_id: str = Query(...),
    day: date = Query(..., alias="date"),
    duration_hours: int = Query(1),
    service: BookingService = Depends(get_booking_service),
):
    """Free start times for a booster on a date"""
    slots = service.available_slots(booster_id, day, duration_hours)
    return SlotsResponse(booster_id=booster_id, date=day, duration_hours=duration_hours, slots=slots)


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    _: None = Depends(rate_limit_checkout),
    current_user: Optional[User] = Depends(get_optional_user),
    service: BookingService = Depends(get_booking_service),
):
    """Book a booster; guests must give an email"""
    return service.create_booking(data, current_user)


@router.get("/mine", response_model=list[BookingResponse])
async def list_my_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_for_customer(current_user)


@router.get("/reviews/booster/{booster_id}", response_model=list[ReviewResponse])
async def list_booster_reviews(booster_id: str, service: BookingService = Depends(get_booking_service)):
    return service.list_reviews(booster_id)


# ============================================================================
# BOOSTER
# ============================================================================


@router.get("/booster", response_model=list[BookingResponse])
async def list_booster_bookings(
    status: Optional[str] = Query(None),
    booster: BoosterProfile = Depends(get_current_booster),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_for_booster(booster, status)


@router.get("/requests", response_model=list[BookingRequestResponse])
async def list_booking_requests(
    booster: BoosterProfile = Depends(get_current_booster),
    service: BookingService = Depends(get_booking_service),
):
    """Released bookings offered to this booster"""
    return service.list_requests(booster)


@router.post("/requests/{request_id}/accept", response_model=BookingResponse)
async def accept_booking_request(
    request_id: str,
    booster: BoosterProfile = Depends(get_current_booster),
    service: BookingService = Depends(get_booking_service),
):
    return service.accept_request(request_id, booster)


@router.post("/requests/{request_id}/decline")
async def decline_booking_request(
    request_id: str,
    booster: BoosterProfile = Depends(get_current_booster),
    service: BookingService = Depends(get_booking_service),
):
    return service.decline_request(request_id, booster)


@router.post("/{booking_id}/respond", response_model=BookingRespondResult)
async def respond_to_booking(
    booking_id: str,
    data: BookingRespond,
    booster: BoosterProfile = Depends(get_current_booster),
    service: BookingService = Depends(get_booking_service),
):
    """Accept or reject a booking assigned to the booster"""
    result = service.respond(booking_id, booster, data.action)
    return BookingRespondResult(
        booking=BookingResponse.model_validate(result["booking"]),
        message=result["message"],
        alternative_booster=result.get("alternative_booster"),
        needs_manual_assignment=result.get("needs_manual_assignment", False),
    )


@router.post("/{booking_id}/release", response_model=BookingReleaseResult)
async def release_booking(
    booking_id: str,
    data: BookingRelease,
    current_user: User = Depends(require_roles(ROLE_BOOSTER, ROLE_ADMIN)),
    service: BookingService = Depends(get_booking_service),
):
    return service.release(booking_id, current_user, data.reason)


@router.post("/{booking_id}/complete", response_model=BookingResponse)
async def complete_booking(
    booking_id: str,
    current_user: User = Depends(require_roles(ROLE_BOOSTER, ROLE_ADMIN)),
    service: BookingService = Depends(get_booking_service),
):
    return service.complete(booking_id, current_user)


# ============================================================================
# ADMIN
# ============================================================================


@router.get("", response_model=list[BookingResponse])
async def list_all_bookings(
    status: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_all(status, date_from, date_to)


@router.post("/{booking_id}/assign", response_model=BookingResponse)
async def assign_booking(
    booking_id: str,
    data: BookingAssign,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: BookingService = Depends(get_booking_service),
):
    return service.assign_booster(booking_id, data.booster_id)


# ============================================================================
# SINGLE BOOKING
# ============================================================================


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking_for_user(booking_id, current_user)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Cancel with a fee based on how much notice is given"""
    return service.cancel(booking_id, current_user)


@router.post("/{booking_id}/review", response_model=ReviewResponse, status_code=201)
async def review_booking(
    booking_id: str,
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.review(booking_id, current_user, data)
