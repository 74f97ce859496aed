from conftest import auth_headers, create_user

from beautyboosters.models import ROLE_BOOSTER, BoosterProfile, Notification, User

APPLICATION = {
    "name": "Maria Holm",
    "email": "Maria@Example.com",
    "phone": "+45 12 34 56 78",
    "city": "Aarhus",
    "skills": ["Bryllupsmakeup", " SFX "],
    "years_experience": 4,
    "business_type": "b_income",
}


class TestSubmit:
    def test_submit_normalizes_fields(self, client, customer):
        resp = client.post("/booster-applications", json=APPLICATION, headers=auth_headers(customer))
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "pending"
        assert body["email"] == "maria@example.com"
        assert body["phone"] == "+4512345678"
        assert body["skills"] == ["Bryllupsmakeup", "SFX"]

    def test_second_pending_application_conflicts(self, client, customer):
        headers = auth_headers(customer)
        client.post("/booster-applications", json=APPLICATION, headers=headers)
        resp = client.post("/booster-applications", json=APPLICATION, headers=headers)
        assert resp.status_code == 409

    def test_cvr_business_needs_valid_cvr(self, client, customer):
        headers = auth_headers(customer)
        resp = client.post("/booster-applications", json={**APPLICATION, "business_type": "cvr"}, headers=headers)
        assert resp.status_code == 422

        resp = client.post(
            "/booster-applications", json={**APPLICATION, "business_type": "cvr", "cvr": "1234"}, headers=headers
        )
        assert resp.status_code == 422

        resp = client.post(
            "/booster-applications",
            json={**APPLICATION, "business_type": "cvr", "cvr": "12345678"},
            headers=headers,
        )
        assert resp.status_code == 201

    def test_existing_booster_cannot_apply(self, client, booster_user):
        resp = client.post("/booster-applications", json=APPLICATION, headers=auth_headers(booster_user))
        assert resp.status_code == 400


class TestDecision:
    def _submit(self, client, user):
        return client.post("/booster-applications", json=APPLICATION, headers=auth_headers(user)).json()["id"]

    def test_approval_creates_profile_and_role(self, client, db, admin, customer):
        application_id = self._submit(client, customer)

        resp = client.post(
            f"/booster-applications/{application_id}/decision",
            json={"approved": True},
            headers=auth_headers(admin),
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"
        assert resp.json()["reviewed_by"] == admin.id

        db.expire_all()
        profile = db.query(BoosterProfile).filter(BoosterProfile.id == customer.id).one()
        assert profile.name == "Maria Holm"
        assert profile.location == "Aarhus"
        assert profile.specialties == ["Bryllupsmakeup", "SFX"]
        assert profile.hourly_rate > 0
        assert db.query(User).filter(User.id == customer.id).one().has_role(ROLE_BOOSTER)

        # Approved applicant can use booster endpoints straight away
        assert client.get("/boosters/me", headers=auth_headers(customer)).status_code == 200

    def test_rejection_uses_default_reason(self, client, db, admin, customer):
        application_id = self._submit(client, customer)

        resp = client.post(
            f"/booster-applications/{application_id}/decision",
            json={"approved": False},
            headers=auth_headers(admin),
        )
        assert resp.json()["status"] == "rejected"
        assert resp.json()["rejection_reason"] == "Ikke specificeret"

        note = db.query(Notification).filter(Notification.recipient_id == customer.id).one()
        assert note.type == "booster_rejected"

    def test_cannot_decide_twice(self, client, admin, customer):
        application_id = self._submit(client, customer)
        url = f"/booster-applications/{application_id}/decision"
        client.post(url, json={"approved": False}, headers=auth_headers(admin))
        assert client.post(url, json={"approved": True}, headers=auth_headers(admin)).status_code == 400

    def test_admin_only(self, client, db, customer):
        application_id = self._submit(client, customer)
        other = create_user(db, "other@example.com")
        resp = client.post(
            f"/booster-applications/{application_id}/decision",
            json={"approved": True},
            headers=auth_headers(other),
        )
        assert resp.status_code == 403

    def test_applicant_lists_own_applications(self, client, customer):
        self._submit(client, customer)
        mine = client.get("/booster-applications/mine", headers=auth_headers(customer)).json()
        assert len(mine) == 1
