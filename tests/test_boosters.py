from datetime import date, timedelta

from conftest import auth_headers, create_booster

from beautyboosters.domain.boosters.service import filter_boosters, sort_boosters
from beautyboosters.models import BoosterProfile


def profiles():
    return [
        BoosterProfile(name="Anna", location="København", hourly_rate=600, rating=4.5, specialties=["Makeup"]),
        BoosterProfile(name="Bo", location="Aarhus C", hourly_rate=450, rating=None, specialties=["Hår", "SFX"]),
        BoosterProfile(name="Cecilie", location="Frederiksberg", hourly_rate=500, rating=4.9, specialties=["Spraytan"]),
    ]


class TestSearchHelpers:
    def test_search_matches_name_or_specialty(self):
        assert [b.name for b in filter_boosters(profiles(), search="sfx")] == ["Bo"]
        assert [b.name for b in filter_boosters(profiles(), search="ceci")] == ["Cecilie"]

    def test_location_and_specialty_filters(self):
        assert [b.name for b in filter_boosters(profiles(), location="aarhus")] == ["Bo"]
        assert filter_boosters(profiles(), specialty="makeup", location="Aarhus") == []

    def test_sorting(self):
        assert [b.name for b in sort_boosters(profiles())] == ["Cecilie", "Anna", "Bo"]
        assert [b.name for b in sort_boosters(profiles(), "price")] == ["Bo", "Cecilie", "Anna"]
        assert [b.name for b in sort_boosters(profiles(), "name")] == ["Anna", "Bo", "Cecilie"]


class TestDirectory:
    def test_list_filters_and_hides_unavailable(self, client, db):
        create_booster(db, "a@example.com", "Anna", location="København", rating=4.0)
        create_booster(db, "b@example.com", "Bente", location="Odense", rating=5.0)
        create_booster(db, "c@example.com", "Carl", location="København", is_available=False)

        everyone = client.get("/boosters").json()
        assert [b["name"] for b in everyone][:2] == ["Bente", "Anna"]

        available = client.get("/boosters", params={"available_only": True, "location": "københavn"}).json()
        assert [b["name"] for b in available] == ["Anna"]

    def test_bad_sort(self, client):
        assert client.get("/boosters", params={"sort": "age"}).status_code == 400

    def test_unknown_booster(self, client):
        assert client.get("/boosters/missing").status_code == 404


class TestOwnProfile:
    def test_update_profile(self, client, booster_user):
        resp = client.patch(
            "/boosters/me",
            json={"bio": "Bryllupsspecialist", "hourly_rate": 650, "specialties": [" Makeup ", "Hår"]},
            headers=auth_headers(booster_user),
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["hourly_rate"] == 650
        assert body["specialties"] == ["Makeup", "Hår"]

    def test_rate_must_be_positive(self, client, booster_user):
        resp = client.patch("/boosters/me", json={"hourly_rate": 0}, headers=auth_headers(booster_user))
        assert resp.status_code == 422

    def test_customer_is_not_a_booster(self, client, customer):
        assert client.get("/boosters/me", headers=auth_headers(customer)).status_code in (403, 404)


class TestAvailability:
    def test_add_list_delete(self, client, booster, booster_user):
        headers = auth_headers(booster_user)
        day = (date.today() + timedelta(days=3)).isoformat()
        resp = client.post(
            "/boosters/me/availability",
            json={"date": day, "start_time": "09:00", "end_time": "12:00", "status": "busy"},
            headers=headers,
        )
        assert resp.status_code == 201
        entry_id = resp.json()["id"]

        public = client.get(f"/boosters/{booster.id}/availability").json()
        assert [e["id"] for e in public] == [entry_id]

        assert client.delete(f"/boosters/me/availability/{entry_id}", headers=headers).status_code == 200
        assert client.get("/boosters/me/availability", headers=headers).json() == []

    def test_past_date_rejected(self, client, booster_user):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        resp = client.post(
            "/boosters/me/availability",
            json={"date": yesterday, "start_time": "09:00", "end_time": "10:00"},
            headers=auth_headers(booster_user),
        )
        assert resp.status_code == 400

    def test_end_must_follow_start(self, client, booster_user):
        day = (date.today() + timedelta(days=3)).isoformat()
        resp = client.post(
            "/boosters/me/availability",
            json={"date": day, "start_time": "12:00", "end_time": "09:00"},
            headers=auth_headers(booster_user),
        )
        assert resp.status_code == 422


class TestCompetenceTags:
    def test_admin_creates_tags(self, client, admin):
        headers = auth_headers(admin)
        resp = client.post("/boosters/competence-tags", json={"name": " Airbrush ", "category": "makeup"}, headers=headers)
        assert resp.status_code == 201
        assert resp.json()["name"] == "Airbrush"

        dup = client.post("/boosters/competence-tags", json={"name": "Airbrush"}, headers=headers)
        assert dup.status_code == 409

        assert [t["name"] for t in client.get("/boosters/competence-tags").json()] == ["Airbrush"]

    def test_customers_cannot_create_tags(self, client, customer):
        resp = client.post("/boosters/competence-tags", json={"name": "X"}, headers=auth_headers(customer))
        assert resp.status_code == 403
