"""Application service - booster signup and admin approval"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_BOOSTER_HOURLY_RATE, DEFAULT_BOOSTER_LOCATION
from ...models import ROLE_BOOSTER, BoosterApplication, BoosterProfile, User, UserRole
from ..notifications.service import notify
from .repository import ApplicationRepository
from .schemas import ApplicationCreate

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "Ikke specificeret"


class ApplicationService:
    """Service layer for booster applications"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ApplicationRepository()

    def submit(self, data: ApplicationCreate, user: User) -> BoosterApplication:
        if user.has_role(ROLE_BOOSTER):
            raise HTTPException(status_code=400, detail="You are already a booster")
        if self.repo.get_pending_for_user(self.db, user.id):
            raise HTTPException(status_code=409, detail="You already have a pending application")

        application = self.repo.create(self.db, user.id, **data.model_dump())
        logger.info(f"📝 Booster application {application.id} submitted by {user.email}")
        return application

    def list_own(self, user: User) -> list[BoosterApplication]:
        return self.repo.get_for_user(self.db, user.id)

    def list_applications(self, status: Optional[str] = None) -> list[BoosterApplication]:
        return self.repo.get_all(self.db, status)

    def get_application(self, application_id: str) -> BoosterApplication:
        application = self.repo.get_by_id(self.db, application_id)
        if not application:
            raise HTTPException(status_code=404, detail="Application not found")
        return application

    def decide(
        self,
        application_id: str,
        approved: bool,
        admin: User,
        rejection_reason: Optional[str] = None,
    ) -> BoosterApplication:
        application = self.get_application(application_id)
        if application.status != "pending":
            raise HTTPException(status_code=400, detail="Application has already been processed")

        try:
            if approved:
                self._approve(application, admin)
            else:
                self._reject(application, admin, rejection_reason)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(application)
        return application

    def _approve(self, application: BoosterApplication, admin: User) -> None:
        profile = self.db.query(BoosterProfile).filter(BoosterProfile.id == application.user_id).first()
        if profile:
            # Re-approved former booster keeps rating and rate
            profile.name = application.name
            profile.specialties = list(application.skills or [])
            profile.location = application.city or profile.location
            profile.is_available = True
        else:
            self.db.add(
                BoosterProfile(
                    id=application.user_id,
                    name=application.name,
                    specialties=list(application.skills or []),
                    location=application.city or DEFAULT_BOOSTER_LOCATION,
                    hourly_rate=DEFAULT_BOOSTER_HOURLY_RATE,
                    years_experience=application.years_experience,
                    is_available=True,
                )
            )

        has_role = (
            self.db.query(UserRole)
            .filter(UserRole.user_id == application.user_id, UserRole.role == ROLE_BOOSTER)
            .first()
        )
        if not has_role:
            self.db.add(UserRole(user_id=application.user_id, role=ROLE_BOOSTER))

        application.status = "approved"
        application.reviewed_at = datetime.utcnow()
        application.reviewed_by = admin.id
        notify(
            self.db,
            application.user_id,
            "Velkommen til Beauty Boosters!",
            "Din ansøgning er blevet godkendt. Du er nu en del af vores team!",
            "booster_approved",
        )
        logger.info(f"✅ Booster application {application.id} approved by {admin.email}")

    def _reject(self, application: BoosterApplication, admin: User, reason: Optional[str]) -> None:
        reason = (reason or "").strip() or DEFAULT_REJECTION_REASON
        application.status = "rejected"
        application.reviewed_at = datetime.utcnow()
        application.reviewed_by = admin.id
        application.rejection_reason = reason
        notify(self.db, application.user_id, "Ansøgning afvist", reason, "booster_rejected")
        logger.info(f"❌ Booster application {application.id} rejected by {admin.email}")
