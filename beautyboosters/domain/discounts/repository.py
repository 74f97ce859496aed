"""Discount repository - Database operations for codes and redemptions"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models_booking import DiscountCode, DiscountRedemption


class DiscountRepository:
    """Repository for discount code database operations"""

    @staticmethod
    def list_codes(db: Session, salon_id: Optional[str] = None) -> list[DiscountCode]:
        """Platform codes when salon_id is None, otherwise that salon's codes"""
        query = db.query(DiscountCode)
        if salon_id is None:
            query = query.filter(DiscountCode.salon_id.is_(None))
        else:
            query = query.filter(DiscountCode.salon_id == salon_id)
        return query.order_by(DiscountCode.created_at.desc()).all()

    @staticmethod
    def get_by_id(db: Session, code_id: str, salon_id: Optional[str] = None) -> Optional[DiscountCode]:
        query = db.query(DiscountCode).filter(DiscountCode.id == code_id)
        if salon_id is None:
            query = query.filter(DiscountCode.salon_id.is_(None))
        else:
            query = query.filter(DiscountCode.salon_id == salon_id)
        return query.first()

    @staticmethod
    def get_by_code(
        db: Session, code: str, salon_id: Optional[str] = None, lock: bool = False
    ) -> Optional[DiscountCode]:
        query = db.query(DiscountCode).filter(func.upper(DiscountCode.code) == code.strip().upper())
        if salon_id is None:
            query = query.filter(DiscountCode.salon_id.is_(None))
        else:
            query = query.filter(DiscountCode.salon_id == salon_id)
        if lock:
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def count_redemptions(db: Session, code_id: str) -> int:
        return db.query(DiscountRedemption).filter(DiscountRedemption.discount_code_id == code_id).count()

    @staticmethod
    def count_user_redemptions(
        db: Session, code_id: str, user_id: Optional[str], email: Optional[str]
    ) -> int:
        conditions = []
        if user_id:
            conditions.append(DiscountRedemption.user_id == user_id)
        if email:
            conditions.append(func.lower(DiscountRedemption.email) == email.strip().lower())
        if not conditions:
            return 0
        return (
            db.query(DiscountRedemption)
            .filter(DiscountRedemption.discount_code_id == code_id, or_(*conditions))
            .count()
        )

    @staticmethod
    def create(db: Session, **data) -> DiscountCode:
        code = DiscountCode(**data)
        db.add(code)
        db.commit()
        db.refresh(code)
        return code

    @staticmethod
    def update(db: Session, code: DiscountCode, **updates) -> DiscountCode:
        for key, value in updates.items():
            if hasattr(code, key):
                setattr(code, key, value)
        db.commit()
        db.refresh(code)
        return code

    @staticmethod
    def delete(db: Session, code: DiscountCode) -> None:
        db.delete(code)
        db.commit()
