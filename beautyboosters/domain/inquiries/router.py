"""Inquiry router - public business inquiry form and admin follow-up"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, User
from ...rate_limiter import create_rate_limiter
from .schemas import InquiryCreate, InquiryResponse, InquiryStatusUpdate
from .service import InquiryService

router = APIRouter(prefix="/inquiries", tags=["Inquiries"])

rate_limit_inquiry = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="inquiry")


def get_inquiry_service(db: Session = Depends(get_db)) -> InquiryService:
    """Dependency injection for InquiryService"""
    return InquiryService(db)


@router.post("", response_model=InquiryResponse, status_code=201)
async def submit_inquiry(
    data: InquiryCreate,
    _: None = Depends(rate_limit_inquiry),
    service: InquiryService = Depends(get_inquiry_service),
):
    return service.submit(data)


@router.get("", response_model=list[InquiryResponse])
async def list_inquiries(
    status: Optional[str] = Query(None),
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: InquiryService = Depends(get_inquiry_service),
):
    return service.list_inquiries(status)


@router.patch("/{inquiry_id}", response_model=InquiryResponse)
async def update_inquiry_status(
    inquiry_id: str,
    data: InquiryStatusUpdate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: InquiryService = Depends(get_inquiry_service),
):
    return service.update_status(inquiry_id, data.status)
