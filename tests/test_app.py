from conftest import auth_headers


class TestApp:
    def test_health_skips_security_headers(self, client):
        resp = client.get("/health")
        assert resp.json() == {"status": "healthy"}
        assert "Content-Security-Policy" not in resp.headers

    def test_security_headers_on_api_routes(self, client):
        resp = client.get("/")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert "default-src 'none'" in resp.headers["Content-Security-Policy"]
        assert resp.headers["Cache-Control"].startswith("no-store")

    def test_redis_health_reports_unavailable(self, client):
        body = client.get("/health/redis").json()
        assert body["status"] == "unhealthy"
        assert body["redis"]["connected"] is False

    def test_missing_authorization_is_401(self, client):
        assert client.get("/bookings/mine").status_code in (401, 403)

    def test_model_validator_errors_are_422_json(self, client, admin):
        resp = client.post(
            "/discount-codes", json={"code": "BIG", "type": "percent", "amount": 120}, headers=auth_headers(admin)
        )
        assert resp.status_code == 422
        errors = resp.json()["detail"]
        assert "Percent discounts must be between 0 and 100" in errors[0]["msg"]
