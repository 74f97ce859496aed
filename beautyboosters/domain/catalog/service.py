"""Catalog service - Service listing, admin edits and cart pricing"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Service
from .repository import ServiceRepository
from .schemas import CartLine, CartQuoteResponse, QuotedLine, ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


def price_line(service: Service, people: int) -> float:
    """Group price for the head count when the service defines one, else per-person price"""
    group_pricing = service.group_pricing or {}
    group_price = group_pricing.get(str(people))
    if group_price is not None:
        return float(group_price)
    return float(service.price) * people


def duration_line(service: Service, people: int) -> int:
    """Each person is styled in turn"""
    return service.duration_minutes * people


class CatalogService:
    """Service layer for the service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def list_services(
        self,
        client_type: Optional[str] = None,
        category: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[Service]:
        return self.repo.list_services(self.db, client_type, category, include_inactive)

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get_service(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        service = self.repo.create_service(self.db, **data.model_dump())
        logger.info(f"🆕 Service created: {service.name} ({service.client_type})")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        return self.repo.update_service(self.db, service, **data.model_dump(exclude_unset=True))

    def deactivate_service(self, service_id: str) -> dict:
        service = self.get_service(service_id)
        self.repo.update_service(self.db, service, active=False)
        return {"message": "Service deactivated"}

    def quote_cart(self, lines: list[CartLine]) -> CartQuoteResponse:
        """Price every cart line and total them"""
        services = self.repo.get_services(self.db, [line.service_id for line in lines])

        quoted = []
        for line in lines:
            service = services.get(line.service_id)
            if not service or not service.active:
                raise HTTPException(
                    status_code=404, detail=f"Service {line.service_id} not found"
                )
            quoted.append(
                QuotedLine(
                    service_id=service.id,
                    name=service.name,
                    category=service.category,
                    people=line.people,
                    boosters=line.boosters,
                    final_price=price_line(service, line.people),
                    total_duration=duration_line(service, line.people),
                )
            )

        return CartQuoteResponse(
            lines=quoted,
            total_price=sum(q.final_price for q in quoted),
            total_duration=sum(q.total_duration for q in quoted),
            item_count=len(quoted),
        )
