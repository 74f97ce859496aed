"""Catalog router - public service listing, cart quotes and admin edits"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from ...models import ROLE_ADMIN, User
from .schemas import (
    CartQuoteRequest,
    CartQuoteResponse,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
)
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def list_services(
    client_type: Optional[str] = Query(None, description="privat or virksomhed"),
    category: Optional[str] = Query(None),
    service: CatalogService = Depends(get_catalog_service),
):
    """Active services offered to customers"""
    return service.list_services(client_type, category)


@router.get("/all", response_model=list[ServiceResponse])
async def list_all_services(
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: CatalogService = Depends(get_catalog_service),
):
    """All services including deactivated ones"""
    return service.list_services(include_inactive=True)


@router.post("/quote", response_model=CartQuoteResponse)
async def quote_cart(
    data: CartQuoteRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    """Price a cart of services"""
    return service.quote_cart(data.lines)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, service: CatalogService = Depends(get_catalog_service)):
    return service.get_service(service_id)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_service(data)


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_service(service_id, data)


@router.delete("/{service_id}")
async def deactivate_service(
    service_id: str,
    _: User = Depends(require_roles(ROLE_ADMIN)),
    service: CatalogService = Depends(get_catalog_service),
):
    """Services are deactivated, never deleted, so old jobs keep their references"""
    return service.deactivate_service(service_id)
