import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["SEED_CATALOG"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import time
import uuid
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from beautyboosters import cache, rate_limiter
from beautyboosters.database import Base, SessionLocal, engine
from beautyboosters.main import app
from beautyboosters.models import (
    ROLE_ADMIN,
    ROLE_BOOSTER,
    ROLE_CUSTOMER,
    BoosterProfile,
    Service,
    User,
    UserRole,
)

TEST_SECRET = "test-jwt-secret"


def _no_redis():
    raise ConnectionError("Redis is not available in tests")


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Run every test without Redis: caches miss and rate limits stay in memory"""
    monkeypatch.setattr(rate_limiter, "get_redis_client", _no_redis)
    monkeypatch.setattr(cache, "get_redis_client", _no_redis)


@pytest.fixture(autouse=True)
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def make_token(user_id: str, email: str, expires_in: int = 3600) -> str:
    claims = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,
        "user_metadata": {"full_name": email.split("@")[0].title()},
    }
    return jwt.encode(claims, TEST_SECRET, algorithm="HS256")


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {make_token(user.id, user.email)}"}


def create_user(db, email: str, roles=(ROLE_CUSTOMER,), full_name=None) -> User:
    user = User(id=str(uuid.uuid4()), email=email, full_name=full_name or email.split("@")[0].title())
    for role in roles:
        user.roles.append(UserRole(role=role))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_booster(db, email: str, name: str, location="København", hourly_rate=500.0, specialties=None, **kwargs):
    user = create_user(db, email, roles=(ROLE_CUSTOMER, ROLE_BOOSTER), full_name=name)
    profile = BoosterProfile(
        id=user.id,
        name=name,
        location=location,
        hourly_rate=hourly_rate,
        specialties=specialties if specialties is not None else ["Makeup"],
        is_available=kwargs.pop("is_available", True),
        **kwargs,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return user, profile


def create_service(db, name="Bryllupsmakeup", price=1999.0, duration_minutes=60, **kwargs) -> Service:
    service = Service(
        name=name,
        category=kwargs.pop("category", "Bryllup"),
        price=price,
        duration_minutes=duration_minutes,
        **kwargs,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def next_bookable_day(days_ahead: int = 7) -> date:
    """A future date that is not a Sunday"""
    day = date.today() + timedelta(days=days_ahead)
    if day.weekday() == 6:
        day += timedelta(days=1)
    return day


@pytest.fixture
def admin(db):
    return create_user(db, "admin@beautyboosters.dk", roles=(ROLE_ADMIN,))


@pytest.fixture
def customer(db):
    return create_user(db, "kunde@example.com")


@pytest.fixture
def booster(db):
    _, profile = create_booster(db, "anna@example.com", "Anna Jensen")
    return profile


@pytest.fixture
def booster_user(db, booster):
    return db.query(User).filter(User.id == booster.id).first()
