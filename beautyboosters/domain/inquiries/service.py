"""Inquiry service - business inquiry form submissions"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models_messaging import Inquiry
from ..notifications.service import notify_admins
from .schemas import InquiryCreate

logger = logging.getLogger(__name__)


class InquiryService:
    def __init__(self, db: Session):
        self.db = db

    def submit(self, data: InquiryCreate) -> Inquiry:
        inquiry = Inquiry(**data.model_dump(), status="new")
        self.db.add(inquiry)
        self.db.flush()
        notify_admins(
            self.db,
            "Ny forespørgsel",
            f"{inquiry.name}{f' ({inquiry.company})' if inquiry.company else ''}: {inquiry.project_type or 'projekt'}",
            "inquiry",
        )
        self.db.commit()
        self.db.refresh(inquiry)
        logger.info(f"📨 Inquiry {inquiry.id} received from {inquiry.email}")
        return inquiry

    def list_inquiries(self, status: Optional[str] = None) -> list[Inquiry]:
        query = self.db.query(Inquiry)
        if status:
            query = query.filter(Inquiry.status == status)
        return query.order_by(Inquiry.created_at.desc()).all()

    def update_status(self, inquiry_id: str, status: str) -> Inquiry:
        inquiry = self.db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
        if not inquiry:
            raise HTTPException(status_code=404, detail="Inquiry not found")
        inquiry.status = status
        self.db.commit()
        self.db.refresh(inquiry)
        return inquiry
