"""Default service catalog loaded into an empty database"""

import logging

from sqlalchemy.orm import Session

from ...models import CompetenceTag, Service

logger = logging.getLogger(__name__)

# (name, price, client_type, category, duration_minutes)
DEFAULT_SERVICES = [
    ("Makeup Styling", 1999, "privat", "Makeup & Hår", 60),
    ("Hårstyling / håropsætning", 1999, "privat", "Makeup & Hår", 60),
    ("Makeup & Hårstyling", 2999, "privat", "Makeup & Hår", 90),
    ("Spraytan", 499, "privat", "Spraytan", 30),
    ("Konfirmationsstyling - Makeup OG Hårstyling", 2999, "privat", "Konfirmation", 90),
    ("Brudestyling - Hår & Makeup (uden prøvestyling)", 4999, "privat", "Bryllup - Brudestyling", 120),
    ("Brudestyling - Hår & Makeup (inkl. prøvestyling)", 6499, "privat", "Bryllup - Brudestyling", 180),
    ("1:1 Makeup Session", 2499, "privat", "Makeup Kurser", 120),
    ("The Beauty Bar (makeup kursus)", 4499, "privat", "Makeup Kurser", 180),
    ("Makeup Artist til Touch Up (3 timer)", 4499, "privat", "Event", 180),
    ("Ansigtsmaling til børn", 4499, "privat", "Børn", 120),
    ("Makeup & Hårstyling til Shoot/Reklamefilm", 4499, "virksomhed", "Shoot/reklame", 180),
    ("Key Makeup Artist til projekt", 0, "virksomhed", "Specialister til projekt", 480),
    ("Makeup Assistent til projekt", 0, "virksomhed", "Specialister til projekt", 480),
    ("SFX Expert", 0, "virksomhed", "Specialister til projekt", 240),
    ("Parykdesign", 0, "virksomhed", "Specialister til projekt", 360),
    ("MUA til Film/TV", 0, "virksomhed", "Specialister til projekt", 480),
    ("Event Makeup Services", 0, "virksomhed", "Makeup / styling til Event", 240),
]

DEFAULT_COMPETENCE_TAGS = [
    ("Bryllupsmakeup", "makeup"),
    ("Fotografering", "makeup"),
    ("SFX", "makeup"),
    ("Hår styling", "hair"),
    ("Ansigtsbehandling", "skin"),
    ("Fashion makeup", "makeup"),
    ("Editorial makeup", "makeup"),
]


def seed_catalog(db: Session) -> int:
    """Insert the default services and competence tags when none exist"""
    created = 0
    if db.query(Service).count() == 0:
        for name, price, client_type, category, duration in DEFAULT_SERVICES:
            db.add(
                Service(
                    name=name,
                    price=price,
                    client_type=client_type,
                    category=category,
                    duration_minutes=duration,
                )
            )
            created += 1
    if db.query(CompetenceTag).count() == 0:
        for name, category in DEFAULT_COMPETENCE_TAGS:
            db.add(CompetenceTag(name=name, category=category))
    db.commit()
    if created:
        logger.info(f"🌱 Seeded {created} catalog services")
    return created
