"""Application repository - Database operations for booster applications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import BoosterApplication


class ApplicationRepository:
    @staticmethod
    def get_all(db: Session, status: Optional[str] = None) -> list[BoosterApplication]:
        query = db.query(BoosterApplication)
        if status:
            query = query.filter(BoosterApplication.status == status)
        return query.order_by(BoosterApplication.created_at.desc()).all()

    @staticmethod
    def get_by_id(db: Session, application_id: str) -> Optional[BoosterApplication]:
        return db.query(BoosterApplication).filter(BoosterApplication.id == application_id).first()

    @staticmethod
    def get_for_user(db: Session, user_id: str) -> list[BoosterApplication]:
        return (
            db.query(BoosterApplication)
            .filter(BoosterApplication.user_id == user_id)
            .order_by(BoosterApplication.created_at.desc())
            .all()
        )

    @staticmethod
    def get_pending_for_user(db: Session, user_id: str) -> Optional[BoosterApplication]:
        return (
            db.query(BoosterApplication)
            .filter(BoosterApplication.user_id == user_id, BoosterApplication.status == "pending")
            .first()
        )

    @staticmethod
    def create(db: Session, user_id: str, **data) -> BoosterApplication:
        application = BoosterApplication(user_id=user_id, **data)
        db.add(application)
        db.commit()
        db.refresh(application)
        return application
