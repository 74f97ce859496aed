"""Booster domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import time_to_minutes, validate_time


class BoosterProfileResponse(BaseModel):
    id: str
    name: str
    bio: Optional[str] = None
    specialties: list[str] = []
    location: str
    hourly_rate: float
    rating: Optional[float] = None
    review_count: int = 0
    years_experience: Optional[int] = None
    portfolio_image_url: Optional[str] = None
    is_available: bool = True

    class Config:
        from_attributes = True


class BoosterProfileUpdate(BaseModel):
    """Fields a booster may edit on their own profile"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = None
    specialties: Optional[list[str]] = None
    location: Optional[str] = Field(default=None, min_length=1)
    hourly_rate: Optional[float] = Field(default=None, gt=0)
    years_experience: Optional[int] = Field(default=None, ge=0)
    portfolio_image_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("specialties")
    @classmethod
    def strip_specialties(cls, v):
        if v is None:
            return v
        return [s.strip() for s in v if s and s.strip()]


class AvailabilityCreate(BaseModel):
    date: date
    start_time: str
    end_time: str
    status: Literal["available", "busy"] = "available"
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @model_validator(mode="after")
    def check_range(self):
        if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityResponse(BaseModel):
    id: str
    booster_id: str
    date: date
    start_time: str
    end_time: str
    status: str
    notes: Optional[str] = None
    job_id: Optional[str] = None

    class Config:
        from_attributes = True


class CompetenceTagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category: str = Field(default="general", min_length=1, max_length=100)


class CompetenceTagResponse(BaseModel):
    id: str
    name: str
    category: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
