"""Business inquiry schemas"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_dk_phone, validate_email

InquiryStatus = Literal["new", "contacted", "in_progress", "completed", "rejected"]


class InquiryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str
    phone: str
    company: Optional[str] = Field(default=None, max_length=255)
    project_type: Optional[str] = Field(default=None, max_length=100)
    description: str = Field(min_length=1, max_length=5000)
    location: Optional[str] = Field(default=None, max_length=500)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    people_count: Optional[int] = Field(default=None, ge=1, le=10000)
    budget: Optional[str] = Field(default=None, max_length=100)
    special_requirements: Optional[str] = Field(default=None, max_length=5000)
    service_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_dk_phone(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus


class InquiryResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    company: Optional[str] = None
    project_type: Optional[str] = None
    description: str
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    people_count: Optional[int] = None
    budget: Optional[str] = None
    special_requirements: Optional[str] = None
    service_id: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
