"""Job domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_dk_phone, validate_email, validate_time

JobStatus = Literal["open", "assigned", "completed", "cancelled"]


class JobServiceLine(BaseModel):
    service_id: str
    people_count: int = Field(default=1, ge=1, le=50)


class JobCreate(BaseModel):
    """
    Schema for an admin creating a job.

    With services the price, duration and service_type are derived from
    the catalog; without them they must be given directly.
    """

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    location: str = Field(min_length=1, max_length=500)
    date_needed: date
    time_needed: Optional[str] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    client_type: Literal["privat", "virksomhed"] = "privat"
    boosters_needed: int = Field(default=1, ge=1, le=20)
    required_skills: list[str] = []
    services: list[JobServiceLine] = []
    service_type: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    duration_hours: Optional[float] = Field(default=None, gt=0)
    competence_tag_ids: list[str] = []
    notify_booster_ids: list[str] = []

    @field_validator("time_needed")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @field_validator("client_email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("client_phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_dk_phone(v)
        return v

    @model_validator(mode="after")
    def check_pricing(self):
        if not self.services and self.hourly_rate is None:
            raise ValueError("Either services or hourly_rate is required")
        return self


class JobUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=500)
    date_needed: Optional[date] = None
    time_needed: Optional[str] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    client_type: Optional[Literal["privat", "virksomhed"]] = None
    boosters_needed: Optional[int] = Field(default=None, ge=1, le=20)
    required_skills: Optional[list[str]] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    duration_hours: Optional[float] = Field(default=None, gt=0)
    status: Optional[JobStatus] = None

    @field_validator("time_needed")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)


class JobServiceResponse(BaseModel):
    service_id: str
    service_name: str
    service_price: float
    people_count: int

    class Config:
        from_attributes = True


class JobEarnings(BaseModel):
    gross: float
    vat: float
    net: float
    platform_share: float
    booster_share: float
    per_booster: float


class JobResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    service_type: str
    location: str
    required_skills: list[str] = []
    hourly_rate: float
    date_needed: date
    time_needed: Optional[str] = None
    duration_hours: Optional[float] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    client_type: str
    boosters_needed: int
    status: str
    assigned_booster_id: Optional[str] = None
    assigned_booster_ids: list[str] = []
    services: list[JobServiceResponse] = []
    competence_tag_ids: list[str] = []
    earnings: Optional[JobEarnings] = None
    created_at: Optional[datetime] = None


class JobAssignRequest(BaseModel):
    booster_ids: list[str] = Field(min_length=1)


class JobApplyRequest(BaseModel):
    message: Optional[str] = Field(default=None, max_length=2000)


class JobApplicationResponse(BaseModel):
    id: str
    job_id: str
    booster_id: str
    message: Optional[str] = None
    status: str
    applied_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JobApplyResult(BaseModel):
    application: JobApplicationResponse
    auto_assigned: bool
    message: str


class JobApplicationDecision(BaseModel):
    accept: bool


class JobMessageCreate(BaseModel):
    message_text: Optional[str] = Field(default=None, max_length=5000)
    image_url: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_content(self):
        if not (self.message_text and self.message_text.strip()) and not self.image_url:
            raise ValueError("A message needs text or an image")
        return self


class JobMessageResponse(BaseModel):
    id: str
    job_id: str
    sender_type: str
    sender_id: Optional[str] = None
    message_text: Optional[str] = None
    image_url: Optional[str] = None
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
