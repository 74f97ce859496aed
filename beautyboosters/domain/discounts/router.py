"""Discount router - admin management of platform codes and public validation"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_optional_user, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, User
from ...rate_limiter import create_rate_limiter
from .schemas import (
    DiscountCodeCreate,
    DiscountCodeResponse,
    DiscountCodeUpdate,
    DiscountValidateRequest,
    DiscountValidateResponse,
)
from .service import DiscountService

router = APIRouter(prefix="/discount-codes", tags=["Discount Codes"])

# Guessing codes should be slow
rate_limit_validate = create_rate_limiter(limit=20, window_seconds=60, key_prefix="discount_validate")


def get_discount_service(db: Session = Depends(get_db)) -> DiscountService:
    """Dependency injection for platform-wide DiscountService"""
    return DiscountService(db)


@router.post("/validate", response_model=DiscountValidateResponse)
async def validate_discount_code(
    data: DiscountValidateRequest,
    _: None = Depends(rate_limit_validate),
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Check a code against an order total without redeeming it"""
    service = DiscountService(db, salon_id=data.salon_id)
    email = data.email or (current_user.email if current_user else None)
    code, discount = service.validate(
        data.code, data.order_amount, current_user.id if current_user else None, email
    )
    return DiscountValidateResponse(
        valid=True,
        code=code.code,
        type=code.type,
        amount=code.amount,
        discount_amount=discount,
        final_amount=round(data.order_amount - discount, 2),
    )


@router.get("", response_model=list[DiscountCodeResponse])
async def list_discount_codes(
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: DiscountService = Depends(get_discount_service),
):
    return service.list_codes()


@router.post("", response_model=DiscountCodeResponse, status_code=201)
async def create_discount_code(
    data: DiscountCodeCreate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: DiscountService = Depends(get_discount_service),
):
    return service.create_code(data)


@router.patch("/{code_id}", response_model=DiscountCodeResponse)
async def update_discount_code(
    code_id: str,
    data: DiscountCodeUpdate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: DiscountService = Depends(get_discount_service),
):
    return service.update_code(code_id, data)


@router.delete("/{code_id}")
async def delete_discount_code(
    code_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: DiscountService = Depends(get_discount_service),
):
    return service.delete_code(code_id)
