"""Salon domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import (
    time_to_minutes,
    validate_cvr,
    validate_dk_phone,
    validate_email,
    validate_time,
)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class DayHours(BaseModel):
    open: Optional[str] = None
    close: Optional[str] = None
    closed: bool = False

    @field_validator("open", "close")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @model_validator(mode="after")
    def check_range(self):
        if self.closed:
            return self
        if not self.open or not self.close:
            raise ValueError("open and close are required unless the day is closed")
        if time_to_minutes(self.open) >= time_to_minutes(self.close):
            raise ValueError("open must be before close")
        return self


class OpeningHours(BaseModel):
    hours: dict[str, DayHours]

    @field_validator("hours")
    @classmethod
    def check_days(cls, v):
        unknown = [day for day in v if day.lower() not in WEEKDAYS]
        if unknown:
            raise ValueError(f"Unknown weekday: {unknown[0]}")
        return {day.lower(): hours for day, hours in v.items()}


class _ContactFields(BaseModel):
    @field_validator("cvr", check_fields=False)
    @classmethod
    def check_cvr(cls, v):
        return validate_cvr(v)

    @field_validator("phone", check_fields=False)
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_dk_phone(v)
        return v

    @field_validator("email", check_fields=False)
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class SalonSignup(_ContactFields):
    name: str = Field(min_length=1, max_length=255)
    cvr: Optional[str] = None
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = None
    email: Optional[str] = None


class SalonUpdate(_ContactFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    cvr: Optional[str] = None
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = None
    email: Optional[str] = None


class SalonServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    price: float = Field(ge=0)
    duration_minutes: int = Field(default=60, gt=0, le=24 * 60)


class SalonServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    price: Optional[float] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0, le=24 * 60)


class SalonServiceResponse(BaseModel):
    id: str
    salon_id: str
    name: str
    category: Optional[str] = None
    price: float
    duration_minutes: int

    class Config:
        from_attributes = True


class EmployeeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=500)


class EmployeeResponse(BaseModel):
    id: str
    salon_id: str
    name: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class SalonResponse(BaseModel):
    id: str
    owner_user_id: str
    name: str
    cvr: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    opening_hours: Optional[dict[str, DayHours]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SalonPublicResponse(SalonResponse):
    services: list[SalonServiceResponse] = []
    employees: list[EmployeeResponse] = []


class SalonBookingCreate(BaseModel):
    service_id: str
    employee_id: Optional[str] = None
    customer_name: str = Field(min_length=1, max_length=255)
    customer_email: str
    customer_phone: Optional[str] = None
    booking_date: date
    start_time: str
    notes: Optional[str] = Field(default=None, max_length=2000)
    discount_code: Optional[str] = Field(default=None, max_length=50)

    @field_validator("start_time")
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


class SalonBookingResponse(BaseModel):
    id: str
    salon_id: str
    service_id: str
    employee_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    booking_date: date
    start_time: str
    end_time: str
    price: float
    notes: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
