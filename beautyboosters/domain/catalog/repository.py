"""Catalog repository - Database operations for services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service


class ServiceRepository:
    """Repository for service catalog database operations"""

    @staticmethod
    def list_services(
        db: Session,
        client_type: Optional[str] = None,
        category: Optional[str] = None,
        include_inactive: bool = False,
    ) -> list[Service]:
        query = db.query(Service)
        if not include_inactive:
            query = query.filter(Service.active.is_(True))
        if client_type:
            query = query.filter(Service.client_type == client_type)
        if category:
            query = query.filter(Service.category == category)
        return query.order_by(Service.category, Service.name).all()

    @staticmethod
    def get_service(db: Session, service_id: str) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_services(db: Session, service_ids: list[str]) -> dict[str, Service]:
        rows = db.query(Service).filter(Service.id.in_(service_ids)).all()
        return {s.id: s for s in rows}

    @staticmethod
    def count(db: Session) -> int:
        return db.query(Service).count()

    @staticmethod
    def create_service(db: Session, **data) -> Service:
        service = Service(**data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if hasattr(service, key):
                setattr(service, key, value)
        db.commit()
        db.refresh(service)
        return service
