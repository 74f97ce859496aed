"""Booster service - profiles, search, availability and competence tags"""

import logging
from datetime import date
from typing import Iterable, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import BoosterAvailability, BoosterProfile, CompetenceTag
from .repository import BoosterRepository
from .schemas import AvailabilityCreate, BoosterProfileUpdate, CompetenceTagCreate

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("rating", "price", "name")


def filter_boosters(
    boosters: Iterable[BoosterProfile],
    search: Optional[str] = None,
    location: Optional[str] = None,
    specialty: Optional[str] = None,
) -> list[BoosterProfile]:
    """
    Case-insensitive substring filters.

    search matches the name or any specialty, location matches the
    location text, specialty matches any specialty.
    """
    result = list(boosters)

    if search:
        term = search.strip().lower()
        result = [
            b
            for b in result
            if term in b.name.lower() or any(term in s.lower() for s in b.specialties or [])
        ]

    if specialty:
        term = specialty.strip().lower()
        result = [b for b in result if any(term in s.lower() for s in b.specialties or [])]

    if location:
        term = location.strip().lower()
        result = [b for b in result if term in (b.location or "").lower()]

    return result


def sort_boosters(boosters: list[BoosterProfile], sort: str = "rating") -> list[BoosterProfile]:
    if sort == "price":
        return sorted(boosters, key=lambda b: b.hourly_rate)
    if sort == "name":
        return sorted(boosters, key=lambda b: b.name.lower())
    # Unrated boosters count as 0
    return sorted(boosters, key=lambda b: b.rating or 0, reverse=True)


class BoosterService:
    """Service layer for booster profiles"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BoosterRepository()

    def search_boosters(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        specialty: Optional[str] = None,
        sort: str = "rating",
        available_only: bool = False,
    ) -> list[BoosterProfile]:
        if sort not in SORT_OPTIONS:
            raise HTTPException(
                status_code=400, detail=f"sort must be one of: {', '.join(SORT_OPTIONS)}"
            )
        boosters = self.repo.get_all(self.db, available_only)
        return sort_boosters(filter_boosters(boosters, search, location, specialty), sort)

    def get_booster(self, booster_id: str) -> BoosterProfile:
        profile = self.repo.get_by_id(self.db, booster_id)
        if not profile:
            raise HTTPException(status_code=404, detail="Booster not found")
        return profile

    def update_profile(self, profile: BoosterProfile, data: BoosterProfileUpdate) -> BoosterProfile:
        updates = data.model_dump(exclude_unset=True)
        logger.info(f"✏️ Booster {profile.id} updating profile fields: {list(updates)}")
        return self.repo.update(self.db, profile, **updates)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def list_own_availability(self, profile: BoosterProfile) -> list[BoosterAvailability]:
        return self.repo.get_availability(self.db, profile.id)

    def list_public_availability(self, booster_id: str) -> list[BoosterAvailability]:
        """Future entries only"""
        self.get_booster(booster_id)
        return self.repo.get_availability(self.db, booster_id, from_date=date.today())

    def add_availability(self, profile: BoosterProfile, data: AvailabilityCreate) -> BoosterAvailability:
        if data.date < date.today():
            raise HTTPException(status_code=400, detail="Cannot add availability in the past")
        return self.repo.create_availability(self.db, profile.id, **data.model_dump())

    def delete_availability(self, profile: BoosterProfile, entry_id: str) -> dict:
        entry = self.repo.get_availability_entry(self.db, entry_id, profile.id)
        if not entry:
            raise HTTPException(status_code=404, detail="Availability entry not found")
        self.repo.delete_availability(self.db, entry)
        return {"message": "Availability deleted"}

    # ------------------------------------------------------------------
    # Competence tags
    # ------------------------------------------------------------------

    def list_tags(self) -> list[CompetenceTag]:
        return self.repo.list_tags(self.db)

    def create_tag(self, data: CompetenceTagCreate) -> CompetenceTag:
        name = data.name.strip()
        if self.repo.get_tag_by_name(self.db, name):
            raise HTTPException(status_code=409, detail="Competence tag already exists")
        return self.repo.create_tag(self.db, name, data.category.strip())
