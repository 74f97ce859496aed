"""Application router - apply to become a booster, admin review"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, User
from ...rate_limiter import create_rate_limiter
from .schemas import ApplicationCreate, ApplicationDecision, ApplicationResponse
from .service import ApplicationService

router = APIRouter(prefix="/booster-applications", tags=["Booster Applications"])

rate_limit_apply = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="booster_apply")


def get_application_service(db: Session = Depends(get_db)) -> ApplicationService:
    """Dependency injection for ApplicationService"""
    return ApplicationService(db)


@router.post("", response_model=ApplicationResponse, status_code=201)
async def submit_application(
    data: ApplicationCreate,
    _: None = Depends(rate_limit_apply),
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return service.submit(data, current_user)


@router.get("/mine", response_model=list[ApplicationResponse])
async def list_own_applications(
    current_user: User = Depends(get_current_user),
    service: ApplicationService = Depends(get_application_service),
):
    return service.list_own(current_user)


@router.get("", response_model=list[ApplicationResponse])
async def list_applications(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: ApplicationService = Depends(get_application_service),
):
    return service.list_applications(status)


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: ApplicationService = Depends(get_application_service),
):
    return service.get_application(application_id)


@router.post("/{application_id}/decision", response_model=ApplicationResponse)
async def decide_application(
    application_id: str,
    data: ApplicationDecision,
    admin: User = Depends(require_roles(ROLE_ADMIN)),
    service: ApplicationService = Depends(get_application_service),
):
    """Approve (creates the booster profile and role) or reject"""
    return service.decide(application_id, data.approved, admin, data.rejection_reason)
