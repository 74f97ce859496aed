"""Discount code schemas - Pydantic models for validation"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...config import DEFAULT_CURRENCY

DiscountType = Literal["percent", "fixed"]


def _naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    # Columns store naive UTC
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class DiscountCodeCreate(BaseModel):
    """Schema for creating a discount code"""

    code: str = Field(min_length=1, max_length=50)
    type: DiscountType = "percent"
    amount: float = Field(gt=0)
    min_amount: float = Field(default=0, ge=0)
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=3, max_length=3)
    active: bool = True
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    max_redemptions: Optional[int] = Field(default=None, ge=1)
    per_user_limit: Optional[int] = Field(default=None, ge=1)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v):
        v = v.strip().upper()
        if not v:
            raise ValueError("Code cannot be empty")
        return v

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v):
        return v.upper()

    @field_validator("valid_from", "valid_to")
    @classmethod
    def to_naive_utc(cls, v):
        return _naive_utc(v)

    @model_validator(mode="after")
    def check_amount(self):
        if self.type == "percent" and self.amount > 100:
            raise ValueError("Percent discounts must be between 0 and 100")
        if self.valid_from and self.valid_to and self.valid_from > self.valid_to:
            raise ValueError("valid_from must be before valid_to")
        return self


class DiscountCodeUpdate(BaseModel):
    type: Optional[DiscountType] = None
    amount: Optional[float] = Field(default=None, gt=0)
    min_amount: Optional[float] = Field(default=None, ge=0)
    active: Optional[bool] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    max_redemptions: Optional[int] = Field(default=None, ge=1)
    per_user_limit: Optional[int] = Field(default=None, ge=1)

    @field_validator("valid_from", "valid_to")
    @classmethod
    def to_naive_utc(cls, v):
        return _naive_utc(v)


class DiscountCodeResponse(BaseModel):
    id: str
    code: str
    type: str
    amount: float
    min_amount: float
    currency: str
    active: bool
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    max_redemptions: Optional[int] = None
    per_user_limit: Optional[int] = None
    salon_id: Optional[str] = None
    redemption_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DiscountValidateRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    order_amount: float = Field(ge=0)
    email: Optional[str] = None
    salon_id: Optional[str] = None


class DiscountValidateResponse(BaseModel):
    valid: bool
    code: str
    type: str
    amount: float
    discount_amount: float
    final_amount: float
