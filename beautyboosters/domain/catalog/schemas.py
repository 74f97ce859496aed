"""Catalog domain schemas - Pydantic models for validation"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

ClientType = Literal["privat", "virksomhed"]


def _check_group_pricing(v: Optional[dict]) -> Optional[dict]:
    if v is None:
        return v
    cleaned = {}
    for people, price in v.items():
        if int(people) < 1:
            raise ValueError("group pricing keys are head counts starting at 1")
        if float(price) < 0:
            raise ValueError("group pricing prices cannot be negative")
        cleaned[str(int(people))] = float(price)
    return cleaned


class ServiceCreate(BaseModel):
    """Schema for adding a service to the catalog"""

    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    client_type: ClientType = "privat"
    price: float = Field(ge=0)
    duration_minutes: int = Field(gt=0)
    description: Optional[str] = None
    group_pricing: Optional[dict[str, float]] = None
    active: bool = True

    @field_validator("group_pricing")
    @classmethod
    def validate_group_pricing(cls, v):
        return _check_group_pricing(v)


class ServiceUpdate(BaseModel):
    """Schema for editing a catalog service"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = None
    client_type: Optional[ClientType] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = None
    group_pricing: Optional[dict[str, float]] = None
    active: Optional[bool] = None

    @field_validator("group_pricing")
    @classmethod
    def validate_group_pricing(cls, v):
        return _check_group_pricing(v)


class ServiceResponse(BaseModel):
    id: str
    name: str
    category: str
    client_type: str
    price: float
    duration_minutes: int
    description: Optional[str] = None
    group_pricing: Optional[dict[str, float]] = None
    active: bool

    class Config:
        from_attributes = True


class CartLine(BaseModel):
    """One service in the customer's cart"""

    service_id: str
    people: int = Field(default=1, ge=1, le=50)
    boosters: int = Field(default=1, ge=1, le=20)


class CartQuoteRequest(BaseModel):
    lines: list[CartLine] = Field(min_length=1)


class QuotedLine(BaseModel):
    service_id: str
    name: str
    category: str
    people: int
    boosters: int
    final_price: float
    total_duration: int  # minutes


class CartQuoteResponse(BaseModel):
    lines: list[QuotedLine]
    total_price: float
    total_duration: int  # minutes
    item_count: int
