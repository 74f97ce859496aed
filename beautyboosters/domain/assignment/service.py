"""
Booster auto-assignment for cart lines.

Round-robin: one cursor walks the available boosters across all lines,
so consecutive lines start where the previous line stopped.
"""

import logging
from typing import Optional, Sequence, TypeVar

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import BoosterProfile
from .schemas import AssignmentLine

logger = logging.getLogger(__name__)

T = TypeVar("T")


def auto_assign(lines: Sequence[AssignmentLine], boosters: Sequence[T]) -> list[list[T]]:
    """
    Give each line `line.boosters` boosters, round-robin.

    A line never holds the same booster twice; when fewer boosters exist
    than a line asks for it gets every booster once.
    """
    assignments: list[list[T]] = []
    if not boosters:
        return [[] for _ in lines]

    cursor = 0
    for line in lines:
        wanted = min(line.boosters, len(boosters))
        chosen: list[T] = []
        # wanted <= len(boosters), so this many consecutive picks are distinct
        for _ in range(wanted):
            chosen.append(boosters[cursor % len(boosters)])
            cursor += 1
        assignments.append(chosen)
    return assignments


def add_booster(assigned: list[str], booster_id: str, capacity: int) -> list[str]:
    """Manually place a booster on a line"""
    if booster_id in assigned:
        raise HTTPException(status_code=400, detail="Booster already assigned to this service")
    if len(assigned) >= capacity:
        raise HTTPException(status_code=400, detail="All booster slots for this service are filled")
    return [*assigned, booster_id]


def remove_booster(assigned: list[str], position: int) -> list[str]:
    if position < 0 or position >= len(assigned):
        raise HTTPException(status_code=404, detail="No booster at that position")
    return assigned[:position] + assigned[position + 1 :]


class AssignmentService:
    """Loads the booster pool and runs the assignment helpers"""

    def __init__(self, db: Session):
        self.db = db

    def available_boosters(self, location: Optional[str] = None) -> list[BoosterProfile]:
        query = self.db.query(BoosterProfile).filter(BoosterProfile.is_available.is_(True))
        boosters = query.order_by(BoosterProfile.name).all()
        if location:
            term = location.strip().lower()
            boosters = [b for b in boosters if term in (b.location or "").lower()]
        return boosters

    def auto_assign(self, lines: list[AssignmentLine], location: Optional[str] = None) -> list[list[BoosterProfile]]:
        boosters = self.available_boosters(location)
        if not boosters:
            logger.warning(f"⚠️ No available boosters for auto-assignment (location={location})")
        return auto_assign(lines, boosters)
