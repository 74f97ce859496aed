from conftest import auth_headers, create_booster, create_service, next_bookable_day

from beautyboosters.domain.jobs.service import job_earnings, price_job, skills_match
from beautyboosters.models import Notification, Service


def job_payload(**overrides):
    payload = {
        "title": "Bryllup i Hellerup",
        "location": "Hellerup",
        "date_needed": next_bookable_day().isoformat(),
        "time_needed": "10:00",
        "hourly_rate": 1000,
        "duration_hours": 3,
        "boosters_needed": 1,
    }
    payload.update(overrides)
    return payload


class TestJobPricing:
    def test_price_job_sums_lines_and_rounds_hours_up(self):
        makeup = Service(name="Makeup Styling", category="Makeup", price=1999, duration_minutes=60)
        tan = Service(name="Spraytan", category="Spraytan", price=499, duration_minutes=30)

        total, hours, service_type = price_job([(makeup, 2), (tan, 1)])

        assert total == 1999 * 2 + 499
        assert hours == 3
        assert service_type == "Makeup Styling, Spraytan"

    def test_private_earnings_take_vat_off_first(self):
        earnings = job_earnings(1000, "privat", boosters_needed=2)
        assert earnings.vat == 200
        assert earnings.net == 800
        assert earnings.platform_share == 320
        assert earnings.booster_share == 480
        assert earnings.per_booster == 240

    def test_business_earnings_have_no_vat(self):
        earnings = job_earnings(1000, "virksomhed")
        assert earnings.vat == 0
        assert earnings.booster_share == 600

    def test_skills_match(self):
        assert skills_match([], ["Makeup"])
        assert skills_match(["sfx", "Hår"], ["SFX"])
        assert not skills_match(["SFX"], ["Makeup"])


class TestAdminJobs:
    def test_create_job_from_catalog_services(self, client, db, admin, booster):
        service = create_service(db, name="Makeup Styling", price=1999, duration_minutes=60)
        resp = client.post(
            "/jobs",
            json=job_payload(
                hourly_rate=None,
                duration_hours=None,
                services=[{"service_id": service.id, "people_count": 3}],
                notify_booster_ids=[booster.id],
            ),
            headers=auth_headers(admin),
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["hourly_rate"] == 1999 * 3
        assert body["duration_hours"] == 3
        assert body["service_type"] == "Makeup Styling"
        assert body["services"][0]["people_count"] == 3
        assert body["earnings"]["gross"] == 1999 * 3

        note = db.query(Notification).filter(Notification.recipient_id == booster.id).one()
        assert note.type == "new_job"
        assert note.job_id == body["id"]

    def test_job_needs_services_or_rate(self, client, admin):
        resp = client.post("/jobs", json=job_payload(hourly_rate=None), headers=auth_headers(admin))
        assert resp.status_code == 422

    def test_assign_caps_at_boosters_needed(self, client, db, admin):
        boosters = [create_booster(db, f"b{i}@example.com", f"Booster {i}")[1] for i in range(3)]
        job_id = client.post("/jobs", json=job_payload(boosters_needed=2), headers=auth_headers(admin)).json()["id"]

        resp = client.post(
            f"/jobs/{job_id}/assign",
            json={"booster_ids": [b.id for b in boosters]},
            headers=auth_headers(admin),
        )
        body = resp.json()
        assert body["assigned_booster_ids"] == [boosters[0].id, boosters[1].id]
        assert body["status"] == "assigned"

        full = client.post(
            f"/jobs/{job_id}/assign", json={"booster_ids": [boosters[2].id]}, headers=auth_headers(admin)
        )
        assert full.status_code == 400

        resp = client.delete(f"/jobs/{job_id}/assign/{boosters[0].id}", headers=auth_headers(admin))
        assert resp.json()["status"] == "open"
        assert resp.json()["assigned_booster_ids"] == [boosters[1].id]

    def test_unknown_booster_rejected(self, client, admin):
        job_id = client.post("/jobs", json=job_payload(), headers=auth_headers(admin)).json()["id"]
        resp = client.post(f"/jobs/{job_id}/assign", json={"booster_ids": ["missing"]}, headers=auth_headers(admin))
        assert resp.status_code == 404


class TestBoosterApplications:
    def test_matching_booster_auto_assigned(self, client, admin, booster, booster_user):
        job_id = client.post(
            "/jobs", json=job_payload(required_skills=["makeup"]), headers=auth_headers(admin)
        ).json()["id"]

        resp = client.post(f"/jobs/{job_id}/apply", json={}, headers=auth_headers(booster_user))

        assert resp.status_code == 201
        assert resp.json()["auto_assigned"] is True
        assert resp.json()["application"]["status"] == "accepted"

        assigned = client.get("/jobs/assigned", headers=auth_headers(booster_user)).json()
        assert [j["id"] for j in assigned] == [job_id]
        assert assigned[0]["status"] == "assigned"

        again = client.post(f"/jobs/{job_id}/apply", json={}, headers=auth_headers(booster_user))
        assert again.status_code in (400, 409)

    def test_unmatched_booster_waits_for_admin(self, client, db, admin, booster, booster_user):
        job_id = client.post(
            "/jobs", json=job_payload(required_skills=["SFX"]), headers=auth_headers(admin)
        ).json()["id"]

        resp = client.post(f"/jobs/{job_id}/apply", json={"message": "Jeg kan godt"}, headers=auth_headers(booster_user))
        assert resp.json()["auto_assigned"] is False
        application_id = resp.json()["application"]["id"]
        assert db.query(Notification).filter(Notification.recipient_id == admin.id).count() == 1

        resp = client.post(
            f"/jobs/applications/{application_id}/decision", json={"accept": True}, headers=auth_headers(admin)
        )
        assert resp.json()["status"] == "accepted"

        job = client.get(f"/jobs/{job_id}", headers=auth_headers(admin)).json()
        assert job["assigned_booster_ids"] == [booster.id]
        assert job["status"] == "assigned"

    def test_board_filters_by_specialty(self, client, admin, booster_user):
        headers = auth_headers(admin)
        client.post("/jobs", json=job_payload(title="Makeup job", required_skills=["Makeup"]), headers=headers)
        client.post("/jobs", json=job_payload(title="SFX job", required_skills=["SFX"]), headers=headers)

        everything = client.get("/jobs/board", headers=auth_headers(booster_user)).json()
        matching = client.get("/jobs/board", params={"matching_only": True}, headers=auth_headers(booster_user)).json()

        assert {j["title"] for j in everything} == {"Makeup job", "SFX job"}
        assert [j["title"] for j in matching] == ["Makeup job"]


class TestJobChat:
    def test_assigned_booster_and_admin_can_chat(self, client, db, admin, booster, booster_user):
        job_id = client.post("/jobs", json=job_payload(), headers=auth_headers(admin)).json()["id"]
        client.post(f"/jobs/{job_id}/assign", json={"booster_ids": [booster.id]}, headers=auth_headers(admin))

        resp = client.post(f"/jobs/{job_id}/messages", json={"message_text": "Hvor parkerer jeg?"}, headers=auth_headers(booster_user))
        assert resp.status_code == 201
        assert resp.json()["sender_type"] == "booster"

        resp = client.post(f"/jobs/{job_id}/messages", json={"message_text": "Bag huset"}, headers=auth_headers(admin))
        assert resp.json()["sender_type"] == "admin"

        messages = client.get(f"/jobs/{job_id}/messages", headers=auth_headers(booster_user)).json()
        assert [m["message_text"] for m in messages] == ["Hvor parkerer jeg?", "Bag huset"]

        resp = client.post(f"/jobs/{job_id}/messages/read", headers=auth_headers(booster_user))
        assert resp.json() == {"updated": 1}

    def test_outsider_booster_forbidden(self, client, db, admin):
        outsider, _ = create_booster(db, "out@example.com", "Out")
        job_id = client.post("/jobs", json=job_payload(), headers=auth_headers(admin)).json()["id"]
        resp = client.get(f"/jobs/{job_id}/messages", headers=auth_headers(outsider))
        assert resp.status_code == 403

    def test_empty_message_rejected(self, client, admin):
        job_id = client.post("/jobs", json=job_payload(), headers=auth_headers(admin)).json()["id"]
        resp = client.post(f"/jobs/{job_id}/messages", json={"message_text": "  "}, headers=auth_headers(admin))
        assert resp.status_code == 422
