import uuid

import pytest
from conftest import make_token
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from jose import jwt

from beautyboosters import rate_limiter
from beautyboosters.models import ROLE_CUSTOMER, User


class TestTokens:
    def test_first_request_creates_customer(self, client, db):
        user_id = str(uuid.uuid4())
        headers = {"Authorization": f"Bearer {make_token(user_id, 'ny@example.com')}"}

        resp = client.get("/notifications/unread-count", headers=headers)

        assert resp.status_code == 200
        user = db.query(User).filter(User.id == user_id).one()
        assert user.email == "ny@example.com"
        assert user.full_name == "Ny"
        assert user.role_names == {ROLE_CUSTOMER}

    def test_expired_token(self, client):
        token = make_token(str(uuid.uuid4()), "gammel@example.com", expires_in=-60)
        resp = client.get("/notifications", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.headers["X-Token-Expired"] == "true"

    def test_malformed_token(self, client):
        resp = client.get("/notifications", headers={"Authorization": "Bearer not-a-jwt"})
        assert resp.status_code == 401

    def test_wrong_secret(self, client):
        token = jwt.encode({"sub": "x", "aud": "authenticated"}, "other-secret", algorithm="HS256")
        resp = client.get("/notifications", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


class TestRateLimiter:
    def test_fixed_window_in_memory(self, monkeypatch):
        monkeypatch.setattr(rate_limiter, "memory_cache", {})
        key = f"test:{uuid.uuid4()}"

        results = [rate_limiter.check_rate_limit(key, 2, 60, None)[0] for _ in range(3)]

        assert results == [True, True, False]

    @pytest.fixture
    def limited_app(self, monkeypatch):
        monkeypatch.setattr(rate_limiter, "RATE_LIMIT_ENABLED", True)
        monkeypatch.setattr(rate_limiter, "memory_cache", {})
        app = FastAPI()
        limiter = rate_limiter.create_rate_limiter(limit=1, window_seconds=60, key_prefix="test_checkout")

        @app.get("/ping")
        async def ping(_: None = Depends(limiter)):
            return {"ok": True}

        return TestClient(app)

    def test_429_with_retry_after(self, limited_app):
        assert limited_app.get("/ping").status_code == 200

        resp = limited_app.get("/ping")

        assert resp.status_code == 429
        assert int(resp.headers["Retry-After"]) > 0
        assert resp.json()["detail"]["limit"] == 1

    def test_limits_are_per_client_ip(self, limited_app):
        assert limited_app.get("/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
        assert limited_app.get("/ping", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 200
