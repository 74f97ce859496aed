"""Booster router - public directory plus a booster's own profile and calendar"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_booster, require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, BoosterProfile, User
from .schemas import (
    AvailabilityCreate,
    AvailabilityResponse,
    BoosterProfileResponse,
    BoosterProfileUpdate,
    CompetenceTagCreate,
    CompetenceTagResponse,
)
from .service import BoosterService

router = APIRouter(prefix="/boosters", tags=["Boosters"])


def get_booster_service(db: Session = Depends(get_db)) -> BoosterService:
    """Dependency injection for BoosterService"""
    return BoosterService(db)


@router.get("", response_model=list[BoosterProfileResponse])
async def list_boosters(
    search: Optional[str] = Query(None, description="Matches name or specialty"),
    location: Optional[str] = Query(None),
    specialty: Optional[str] = Query(None),
    sort: str = Query("rating", description="rating, price or name"),
    available_only: bool = Query(False),
    service: BoosterService = Depends(get_booster_service),
):
    return service.search_boosters(search, location, specialty, sort, available_only)


# ============================================================================
# SIGNED-IN BOOSTER
# ============================================================================


@router.get("/me", response_model=BoosterProfileResponse)
async def get_own_profile(booster: BoosterProfile = Depends(get_current_booster)):
    return booster


@router.patch("/me", response_model=BoosterProfileResponse)
async def update_own_profile(
    data: BoosterProfileUpdate,
    booster: BoosterProfile = Depends(get_current_booster),
    service: BoosterService = Depends(get_booster_service),
):
    return service.update_profile(booster, data)


@router.get("/me/availability", response_model=list[AvailabilityResponse])
async def list_own_availability(
    booster: BoosterProfile = Depends(get_current_booster),
    service: BoosterService = Depends(get_booster_service),
):
    return service.list_own_availability(booster)


@router.post("/me/availability", response_model=AvailabilityResponse, status_code=201)
async def add_availability(
    data: AvailabilityCreate,
    booster: BoosterProfile = Depends(get_current_booster),
    service: BoosterService = Depends(get_booster_service),
):
    return service.add_availability(booster, data)


@router.delete("/me/availability/{entry_id}")
async def delete_availability(
    entry_id: str,
    booster: BoosterProfile = Depends(get_current_booster),
    service: BoosterService = Depends(get_booster_service),
):
    return service.delete_availability(booster, entry_id)


# ============================================================================
# COMPETENCE TAGS
# ============================================================================


@router.get("/competence-tags", response_model=list[CompetenceTagResponse])
async def list_competence_tags(service: BoosterService = Depends(get_booster_service)):
    return service.list_tags()


@router.post("/competence-tags", response_model=CompetenceTagResponse, status_code=201)
async def create_competence_tag(
    data: CompetenceTagCreate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: BoosterService = Depends(get_booster_service),
):
    return service.create_tag(data)


# ============================================================================
# PUBLIC PROFILE
# ============================================================================


@router.get("/{booster_id}", response_model=BoosterProfileResponse)
async def get_booster(booster_id: str, service: BoosterService = Depends(get_booster_service)):
    return service.get_booster(booster_id)


@router.get("/{booster_id}/availability", response_model=list[AvailabilityResponse])
async def get_booster_availability(
    booster_id: str, service: BoosterService = Depends(get_booster_service)
):
    """Upcoming availability entries"""
    return service.list_public_availability(booster_id)
