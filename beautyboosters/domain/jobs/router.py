"""Job router - admin job management, booster job board and job chat"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_booster, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, ROLE_BOOSTER, BoosterProfile, User
from .schemas import (
    JobApplicationDecision,
    JobApplicationResponse,
    JobApplyRequest,
    JobApplyResult,
    JobAssignRequest,
    JobCreate,
    JobMessageCreate,
    JobMessageResponse,
    JobResponse,
    JobUpdate,
)
from .service import JobManagementService, to_job_response

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def get_job_service(db: Session = Depends(get_db)) -> JobManagementService:
    """Dependency injection for JobManagementService"""
    return JobManagementService(db)


# ============================================================================
# BOOSTER
# ============================================================================


@router.get("/board", response_model=list[JobResponse])
async def job_board(
    matching_only: bool = Query(False, description="Only jobs matching my specialties"),
    booster: BoosterProfile = Depends(get_current_booster),
    service: JobManagementService = Depends(get_job_service),
):
    """Upcoming open jobs"""
    return [to_job_response(j) for j in service.job_board(booster, matching_only)]


@router.get("/assigned", response_model=list[JobResponse])
async def assigned_jobs(
    booster: BoosterProfile = Depends(get_current_booster),
    service: JobManagementService = Depends(get_job_service),
):
    return [to_job_response(j) for j in service.assigned_jobs(booster)]


@router.post("/{job_id}/apply", response_model=JobApplyResult, status_code=201)
async def apply_for_job(
    job_id: str,
    data: JobApplyRequest,
    booster: BoosterProfile = Depends(get_current_booster),
    service: JobManagementService = Depends(get_job_service),
):
    result = service.apply(job_id, booster, data.message)
    return JobApplyResult(
        application=JobApplicationResponse.model_validate(result["application"]),
        auto_assigned=result["auto_assigned"],
        message=result["message"],
    )


# ============================================================================
# ADMIN
# ============================================================================


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    status: Optional[str] = Query(None),
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return [to_job_response(j) for j in service.list_jobs(status)]


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    data: JobCreate,
    admin: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return to_job_response(service.create_job(data, admin))


@router.post("/applications/{application_id}/decision", response_model=JobApplicationResponse)
async def decide_job_application(
    application_id: str,
    data: JobApplicationDecision,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return service.decide_application(application_id, data.accept)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN, ROLE_BOOSTER)),
    service: JobManagementService = Depends(get_job_service),
):
    return to_job_response(service.get_job(job_id))


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    data: JobUpdate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return to_job_response(service.update_job(job_id, data))


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return service.delete_job(job_id)


@router.post("/{job_id}/assign", response_model=JobResponse)
async def assign_boosters(
    job_id: str,
    data: JobAssignRequest,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return to_job_response(service.assign_boosters(job_id, data.booster_ids))


@router.delete("/{job_id}/assign/{booster_id}", response_model=JobResponse)
async def remove_assignment(
    job_id: str,
    booster_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return to_job_response(service.remove_assignment(job_id, booster_id))


@router.get("/{job_id}/applications", response_model=list[JobApplicationResponse])
async def list_job_applications(
    job_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: JobManagementService = Depends(get_job_service),
):
    return service.list_applications(job_id)


# ============================================================================
# JOB CHAT
# ============================================================================


@router.get("/{job_id}/messages", response_model=list[JobMessageResponse])
async def list_job_messages(
    job_id: str,
    current_user: User = Depends(require_roles(ROLE_ADMIN, ROLE_BOOSTER)),
    service: JobManagementService = Depends(get_job_service),
):
    return service.list_messages(job_id, current_user)


@router.post("/{job_id}/messages", response_model=JobMessageResponse, status_code=201)
async def post_job_message(
    job_id: str,
    data: JobMessageCreate,
    current_user: User = Depends(require_roles(ROLE_ADMIN, ROLE_BOOSTER)),
    service: JobManagementService = Depends(get_job_service),
):
    return service.post_message(job_id, current_user, data)


@router.post("/{job_id}/messages/read")
async def mark_job_messages_read(
    job_id: str,
    current_user: User = Depends(require_roles(ROLE_ADMIN, ROLE_BOOSTER)),
    service: JobManagementService = Depends(get_job_service),
):
    return service.mark_read(job_id, current_user)
