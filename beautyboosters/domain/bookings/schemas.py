"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_dk_phone, validate_email, validate_time
from ..catalog.schemas import CartLine


class BookingCreate(BaseModel):
    """Schema for a customer booking a booster"""

    booster_id: str
    booking_date: date
    booking_time: str
    duration_hours: int = Field(default=1, ge=1, le=5)
    service_name: Optional[str] = Field(default=None, max_length=255)
    # Cart lines priced from the catalog instead of the hourly rate
    service_lines: Optional[list[CartLine]] = None
    customer_name: Optional[str] = Field(default=None, max_length=255)
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=500)
    special_requests: Optional[str] = Field(default=None, max_length=2000)
    discount_code: Optional[str] = Field(default=None, max_length=50)
    cancellation_policy_accepted: bool = False

    @field_validator("booking_time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @field_validator("customer_email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("customer_phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_dk_phone(v)
        return v


class BookingResponse(BaseModel):
    id: str
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: str
    customer_phone: Optional[str] = None
    booster_id: Optional[str] = None
    booster_name: Optional[str] = None
    service_name: str
    service_lines: Optional[list[dict]] = None
    booking_date: date
    booking_time: str
    duration_hours: float
    amount: float
    discount_code: Optional[str] = None
    discount_amount: float = 0
    location: Optional[str] = None
    special_requests: Optional[str] = None
    status: str
    booster_status: str
    assignment_attempts: int = 0
    cancellation_policy_accepted: Optional[bool] = None
    cancellation_fee: Optional[float] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BookingRespond(BaseModel):
    action: Literal["accept", "reject"]


class BookingRespondResult(BaseModel):
    booking: BookingResponse
    message: str
    alternative_booster: Optional[str] = None
    needs_manual_assignment: bool = False


class BookingRelease(BaseModel):
    reason: Optional[str] = None


class BookingReleaseResult(BaseModel):
    message: str
    notified_boosters: int
    requests_created: int
    job_id: str


class BookingAssign(BaseModel):
    booster_id: str


class SlotsResponse(BaseModel):
    booster_id: str
    date: date
    duration_hours: int
    slots: list[str]


class BookingRequestResponse(BaseModel):
    id: str
    booking_id: str
    booster_id: str
    status: str
    expires_at: datetime
    created_at: Optional[datetime] = None
    booking: BookingResponse

    class Config:
        from_attributes = True


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewResponse(BaseModel):
    id: str
    booking_id: str
    booster_id: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
