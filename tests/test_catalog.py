from conftest import auth_headers, create_service

from beautyboosters.domain.catalog.seed import DEFAULT_SERVICES, seed_catalog
from beautyboosters.domain.catalog.service import duration_line, price_line
from beautyboosters.models import CompetenceTag, Service


class TestLinePricing:
    def test_price_multiplies_per_person_without_group_pricing(self):
        service = Service(name="Spraytan", category="Spraytan", price=499, duration_minutes=30)
        assert price_line(service, 3) == 1497

    def test_group_price_used_for_matching_head_count(self):
        service = Service(
            name="Brudestyling",
            category="Bryllup",
            price=4999,
            duration_minutes=120,
            group_pricing={"1": 4999, "2": 8999},
        )
        assert price_line(service, 2) == 8999
        # No group price for 3 people falls back to per person
        assert price_line(service, 3) == 4999 * 3

    def test_duration_scales_with_people(self):
        service = Service(name="Makeup", category="Makeup", price=1999, duration_minutes=60)
        assert duration_line(service, 4) == 240


class TestCartQuote:
    def test_quote_totals_lines(self, client, db):
        makeup = create_service(db, name="Makeup Styling", price=1999, duration_minutes=60)
        tan = create_service(db, name="Spraytan", price=499, duration_minutes=30, category="Spraytan")

        resp = client.post(
            "/services/quote",
            json={
                "lines": [
                    {"service_id": makeup.id, "people": 2},
                    {"service_id": tan.id, "people": 1, "boosters": 1},
                ]
            },
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["total_price"] == 1999 * 2 + 499
        assert body["total_duration"] == 150
        assert body["item_count"] == 2
        assert body["lines"][0]["name"] == "Makeup Styling"

    def test_quote_rejects_inactive_service(self, client, db):
        retired = create_service(db, name="Old", active=False)
        resp = client.post("/services/quote", json={"lines": [{"service_id": retired.id}]})
        assert resp.status_code == 404

    def test_quote_requires_lines(self, client):
        resp = client.post("/services/quote", json={"lines": []})
        assert resp.status_code == 422


class TestCatalogAdmin:
    def test_public_listing_hides_inactive_and_filters_client_type(self, client, db):
        create_service(db, name="Makeup Styling")
        create_service(db, name="SFX Expert", client_type="virksomhed", price=0)
        create_service(db, name="Retired", active=False)

        names = {s["name"] for s in client.get("/services").json()}
        assert names == {"Makeup Styling", "SFX Expert"}

        business = client.get("/services", params={"client_type": "virksomhed"}).json()
        assert [s["name"] for s in business] == ["SFX Expert"]

    def test_admin_creates_and_deactivates_service(self, client, admin):
        resp = client.post(
            "/services",
            json={
                "name": "Ansigtsmaling",
                "category": "Børn",
                "price": 4499,
                "duration_minutes": 120,
                "group_pricing": {"1": 4499, "2": 7999},
            },
            headers=auth_headers(admin),
        )
        assert resp.status_code == 201
        service_id = resp.json()["id"]
        assert resp.json()["group_pricing"] == {"1": 4499.0, "2": 7999.0}

        resp = client.delete(f"/services/{service_id}", headers=auth_headers(admin))
        assert resp.status_code == 200
        assert client.get(f"/services/{service_id}").json()["active"] is False

    def test_customer_cannot_create_service(self, client, customer):
        resp = client.post(
            "/services",
            json={"name": "X", "category": "Y", "price": 1, "duration_minutes": 30},
            headers=auth_headers(customer),
        )
        assert resp.status_code == 403

    def test_missing_token_is_401(self, client):
        resp = client.post(
            "/services", json={"name": "X", "category": "Y", "price": 1, "duration_minutes": 30}
        )
        assert resp.status_code in (401, 403)

    def test_negative_group_price_rejected(self, client, admin):
        resp = client.post(
            "/services",
            json={
                "name": "X",
                "category": "Y",
                "price": 1,
                "duration_minutes": 30,
                "group_pricing": {"2": -5},
            },
            headers=auth_headers(admin),
        )
        assert resp.status_code == 422


class TestSeed:
    def test_seed_fills_empty_catalog_once(self, db):
        seed_catalog(db)
        assert db.query(Service).count() == len(DEFAULT_SERVICES)
        assert db.query(CompetenceTag).count() > 0

        assert seed_catalog(db) == 0
        assert db.query(Service).count() == len(DEFAULT_SERVICES)
