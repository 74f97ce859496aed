"""Booster repository - Database operations for profiles, availability and tags"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import BoosterAvailability, BoosterProfile, CompetenceTag


class BoosterRepository:
    """Repository for booster database operations"""

    @staticmethod
    def get_all(db: Session, available_only: bool = False) -> list[BoosterProfile]:
        query = db.query(BoosterProfile)
        if available_only:
            query = query.filter(BoosterProfile.is_available.is_(True))
        return query.all()

    @staticmethod
    def get_by_id(db: Session, booster_id: str) -> Optional[BoosterProfile]:
        return db.query(BoosterProfile).filter(BoosterProfile.id == booster_id).first()

    @staticmethod
    def update(db: Session, profile: BoosterProfile, **updates) -> BoosterProfile:
        for key, value in updates.items():
            if hasattr(profile, key):
                setattr(profile, key, value)
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def get_availability(
        db: Session, booster_id: str, from_date: Optional[date] = None
    ) -> list[BoosterAvailability]:
        query = db.query(BoosterAvailability).filter(BoosterAvailability.booster_id == booster_id)
        if from_date:
            query = query.filter(BoosterAvailability.date >= from_date)
        return query.order_by(BoosterAvailability.date, BoosterAvailability.start_time).all()

    @staticmethod
    def get_availability_on(db: Session, booster_id: str, day: date) -> list[BoosterAvailability]:
        return (
            db.query(BoosterAvailability)
            .filter(BoosterAvailability.booster_id == booster_id, BoosterAvailability.date == day)
            .all()
        )

    @staticmethod
    def get_availability_entry(
        db: Session, entry_id: str, booster_id: str
    ) -> Optional[BoosterAvailability]:
        return (
            db.query(BoosterAvailability)
            .filter(BoosterAvailability.id == entry_id, BoosterAvailability.booster_id == booster_id)
            .first()
        )

    @staticmethod
    def create_availability(db: Session, booster_id: str, **data) -> BoosterAvailability:
        entry = BoosterAvailability(booster_id=booster_id, **data)
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def delete_availability(db: Session, entry: BoosterAvailability) -> None:
        db.delete(entry)
        db.commit()

    @staticmethod
    def list_tags(db: Session) -> list[CompetenceTag]:
        return db.query(CompetenceTag).order_by(CompetenceTag.category, CompetenceTag.name).all()

    @staticmethod
    def get_tag_by_name(db: Session, name: str) -> Optional[CompetenceTag]:
        return db.query(CompetenceTag).filter(CompetenceTag.name == name).first()

    @staticmethod
    def create_tag(db: Session, name: str, category: str) -> CompetenceTag:
        tag = CompetenceTag(name=name, category=category)
        db.add(tag)
        db.commit()
        db.refresh(tag)
        return tag
