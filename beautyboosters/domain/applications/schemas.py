"""Booster application schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_cvr, validate_dk_phone, validate_email


class ApplicationCreate(BaseModel):
    """Schema for applying to become a booster"""

    name: str = Field(min_length=1, max_length=255)
    email: str
    phone: Optional[str] = None
    city: Optional[str] = Field(default=None, max_length=255)
    skills: list[str] = []
    years_experience: Optional[int] = Field(default=None, ge=0, le=80)
    business_type: Literal["cvr", "b_income"] = "b_income"
    cvr: Optional[str] = None
    portfolio_links: list[str] = []
    motivation: Optional[str] = Field(default=None, max_length=5000)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_dk_phone(v)
        return v

    @field_validator("skills")
    @classmethod
    def clean_skills(cls, v):
        return [s.strip() for s in v if s and s.strip()]

    @model_validator(mode="after")
    def check_cvr(self):
        if self.business_type == "cvr":
            if not self.cvr:
                raise ValueError("A CVR number is required for CVR businesses")
            self.cvr = validate_cvr(self.cvr)
        elif self.cvr:
            self.cvr = validate_cvr(self.cvr)
        return self


class ApplicationDecision(BaseModel):
    approved: bool
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)


class ApplicationResponse(BaseModel):
    id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    city: Optional[str] = None
    skills: list[str] = []
    years_experience: Optional[int] = None
    business_type: str
    cvr: Optional[str] = None
    portfolio_links: Optional[list[str]] = None
    motivation: Optional[str] = None
    status: str
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
