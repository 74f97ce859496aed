"""Discount service - code management, validation and redemption"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models_booking import DiscountCode, DiscountRedemption
from .repository import DiscountRepository
from .schemas import DiscountCodeCreate, DiscountCodeUpdate

logger = logging.getLogger(__name__)


def compute_discount(code: DiscountCode, order_amount: float) -> float:
    """Percent of the order or a fixed amount, never more than the order"""
    if code.type == "percent":
        discount = order_amount * code.amount / 100
    else:
        discount = code.amount
    return round(min(discount, order_amount), 2)


class DiscountService:
    """
    Discount codes are owned by the platform (salon_id None) or by one salon.
    Every lookup is scoped to the owner.
    """

    def __init__(self, db: Session, salon_id: Optional[str] = None):
        self.db = db
        self.salon_id = salon_id
        self.repo = DiscountRepository()

    def list_codes(self) -> list[DiscountCode]:
        return self.repo.list_codes(self.db, self.salon_id)

    def get_code(self, code_id: str) -> DiscountCode:
        code = self.repo.get_by_id(self.db, code_id, self.salon_id)
        if not code:
            raise HTTPException(status_code=404, detail="Discount code not found")
        return code

    def create_code(self, data: DiscountCodeCreate) -> DiscountCode:
        if self.repo.get_by_code(self.db, data.code, self.salon_id):
            raise HTTPException(status_code=409, detail=f"Discount code {data.code} already exists")
        code = self.repo.create(self.db, salon_id=self.salon_id, **data.model_dump())
        logger.info(f"🏷️ Discount code created: {code.code} ({code.type} {code.amount})")
        return code

    def update_code(self, code_id: str, data: DiscountCodeUpdate) -> DiscountCode:
        code = self.get_code(code_id)
        updates = data.model_dump(exclude_unset=True)
        new_type = updates.get("type", code.type)
        new_amount = updates.get("amount", code.amount)
        if new_type == "percent" and new_amount > 100:
            raise HTTPException(status_code=400, detail="Percent discounts must be between 0 and 100")
        return self.repo.update(self.db, code, **updates)

    def delete_code(self, code_id: str) -> dict:
        code = self.get_code(code_id)
        self.repo.delete(self.db, code)
        logger.info(f"🗑️ Discount code deleted: {code.code}")
        return {"message": "Discount code deleted"}

    def validate(
        self,
        code_text: str,
        order_amount: float,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        lock: bool = False,
    ) -> tuple[DiscountCode, float]:
        """
        Check a code against an order and return it with the discount amount.

        Raises:
            HTTPException 400 with the reason the code cannot be used
        """
        code = self.repo.get_by_code(self.db, code_text, self.salon_id, lock=lock)
        if not code or not code.active:
            raise HTTPException(status_code=400, detail="Invalid discount code")

        now = datetime.utcnow()
        if code.valid_from and code.valid_from > now:
            raise HTTPException(status_code=400, detail="Discount code is not valid yet")
        if code.valid_to and code.valid_to < now:
            raise HTTPException(status_code=400, detail="Discount code has expired")
        if order_amount < (code.min_amount or 0):
            raise HTTPException(
                status_code=400,
                detail=f"Order must be at least {code.min_amount:.0f} {code.currency} to use this code",
            )
        if code.max_redemptions is not None:
            if self.repo.count_redemptions(self.db, code.id) >= code.max_redemptions:
                raise HTTPException(status_code=400, detail="Discount code has been used up")
        if code.per_user_limit is not None:
            used = self.repo.count_user_redemptions(self.db, code.id, user_id, email)
            if used >= code.per_user_limit:
                raise HTTPException(status_code=400, detail="You have already used this discount code")

        return code, compute_discount(code, order_amount)

    def redeem(
        self,
        code: DiscountCode,
        order_amount: float,
        discount_amount: float,
        booking_id: Optional[str] = None,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
        salon_booking_id: Optional[str] = None,
    ) -> DiscountRedemption:
        """
        Record a redemption in the caller's transaction.

        Call validate(..., lock=True) first in the same transaction so the
        limits are checked against the row being written.
        """
        redemption = DiscountRedemption(
            discount_code_id=code.id,
            user_id=user_id,
            email=email.strip().lower() if email else None,
            booking_id=booking_id,
            salon_booking_id=salon_booking_id,
            order_amount=order_amount,
            discount_amount=discount_amount,
        )
        self.db.add(redemption)
        return redemption
