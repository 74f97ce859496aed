from datetime import date, timedelta

import pytest
from conftest import auth_headers, create_user, next_bookable_day

from beautyboosters.domain.salons.service import fits_opening_hours
from beautyboosters.models import ROLE_SALON, User
from beautyboosters.models_booking import DiscountRedemption

ALL_WEEK = {
    day: {"open": "09:00", "close": "17:00"}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
}


@pytest.fixture
def owner(db):
    return create_user(db, "salon@example.com", full_name="Salon Ejer")


@pytest.fixture
def salon(client, owner):
    headers = auth_headers(owner)
    body = client.post(
        "/salons/signup",
        json={"name": "Salon Lys", "cvr": "12345678", "city": "Odense", "phone": "66 11 22 33"},
        headers=headers,
    ).json()
    client.put("/salons/me/opening-hours", json={"hours": ALL_WEEK}, headers=headers)
    return body


@pytest.fixture
def salon_service(client, owner, salon):
    return client.post(
        "/salons/me/services",
        json={"name": "Klip", "category": "Hår", "price": 400, "duration_minutes": 60},
        headers=auth_headers(owner),
    ).json()


@pytest.fixture
def employee(client, owner, salon):
    return client.post("/salons/me/employees", json={"name": "Mette"}, headers=auth_headers(owner)).json()


def booking_payload(service_id, **overrides):
    payload = {
        "service_id": service_id,
        "customer_name": "Kunde",
        "customer_email": "Kunde@Example.com",
        "booking_date": next_bookable_day().isoformat(),
        "start_time": "10:00",
    }
    payload.update(overrides)
    return payload


class TestOpeningHours:
    def test_fits_inside_day(self):
        monday = date(2026, 1, 5)
        hours = {"monday": {"open": "09:00", "close": "17:00", "closed": False}}
        assert fits_opening_hours(hours, monday, 9 * 60, 10 * 60)
        assert fits_opening_hours(hours, monday, 16 * 60, 17 * 60)
        assert not fits_opening_hours(hours, monday, 16 * 60 + 30, 17 * 60 + 30)

    def test_closed_or_missing_day(self):
        tuesday = date(2026, 1, 6)
        assert not fits_opening_hours(None, tuesday, 600, 660)
        assert not fits_opening_hours({"tuesday": {"closed": True}}, tuesday, 600, 660)
        assert not fits_opening_hours({"monday": {"open": "09:00", "close": "17:00"}}, tuesday, 600, 660)

    def test_invalid_hours_rejected(self, client, owner, salon):
        resp = client.put(
            "/salons/me/opening-hours",
            json={"hours": {"monday": {"open": "17:00", "close": "09:00"}}},
            headers=auth_headers(owner),
        )
        assert resp.status_code == 422

        resp = client.put(
            "/salons/me/opening-hours",
            json={"hours": {"someday": {"closed": True}}},
            headers=auth_headers(owner),
        )
        assert resp.status_code == 422


class TestSalonSignup:
    def test_signup_adds_salon_role(self, client, db, owner, salon):
        assert salon["name"] == "Salon Lys"
        assert salon["phone"] == "+4566112233"
        assert salon["email"] == owner.email

        db.expire_all()
        assert db.query(User).filter(User.id == owner.id).one().has_role(ROLE_SALON)

        me = client.get("/salons/me", headers=auth_headers(owner)).json()
        assert me["opening_hours"]["monday"]["open"] == "09:00"

    def test_second_signup_conflicts(self, client, owner, salon):
        resp = client.post("/salons/signup", json={"name": "Igen"}, headers=auth_headers(owner))
        assert resp.status_code == 409

    def test_customer_has_no_back_office(self, client, customer):
        assert client.get("/salons/me", headers=auth_headers(customer)).status_code == 403

    def test_public_profile_lists_services_and_team(self, client, salon, salon_service, employee):
        body = client.get(f"/salons/{salon['id']}").json()
        assert [s["name"] for s in body["services"]] == ["Klip"]
        assert [e["name"] for e in body["employees"]] == ["Mette"]


class TestSalonBookings:
    def test_booking_sets_end_time(self, client, salon, salon_service, employee):
        resp = client.post(
            f"/salons/{salon['id']}/bookings",
            json=booking_payload(salon_service["id"], employee_id=employee["id"]),
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["end_time"] == "11:00"
        assert body["price"] == 400
        assert body["customer_email"] == "kunde@example.com"
        assert body["status"] == "confirmed"

    def test_past_date_rejected(self, client, salon, salon_service):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        resp = client.post(
            f"/salons/{salon['id']}/bookings", json=booking_payload(salon_service["id"], booking_date=yesterday)
        )
        assert resp.status_code == 400

    def test_outside_opening_hours_rejected(self, client, salon, salon_service):
        resp = client.post(
            f"/salons/{salon['id']}/bookings", json=booking_payload(salon_service["id"], start_time="16:30")
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "The salon is closed at that time"

    def test_employee_overlap_conflicts(self, client, salon, salon_service, employee):
        url = f"/salons/{salon['id']}/bookings"
        client.post(url, json=booking_payload(salon_service["id"], employee_id=employee["id"]))
        resp = client.post(
            url, json=booking_payload(salon_service["id"], employee_id=employee["id"], start_time="10:30")
        )
        assert resp.status_code == 409

        # Back-to-back is fine
        resp = client.post(
            url, json=booking_payload(salon_service["id"], employee_id=employee["id"], start_time="11:00")
        )
        assert resp.status_code == 201

    def test_salon_discount_code(self, client, db, owner, salon, salon_service):
        client.post(
            "/salons/me/discount-codes",
            json={"code": "LYS25", "type": "percent", "amount": 25},
            headers=auth_headers(owner),
        )
        resp = client.post(
            f"/salons/{salon['id']}/bookings", json=booking_payload(salon_service["id"], discount_code="lys25")
        )
        assert resp.status_code == 201
        assert resp.json()["price"] == 300

        redemption = db.query(DiscountRedemption).one()
        assert redemption.salon_booking_id == resp.json()["id"]
        assert redemption.booking_id is None
        assert redemption.discount_amount == 100

        codes = client.get("/salons/me/discount-codes", headers=auth_headers(owner)).json()
        assert [(c["code"], c["redemption_count"]) for c in codes] == [("LYS25", 1)]

    def test_service_with_bookings_cannot_be_deleted(self, client, owner, salon, salon_service):
        headers = auth_headers(owner)
        booking = client.post(f"/salons/{salon['id']}/bookings", json=booking_payload(salon_service["id"])).json()

        resp = client.delete(f"/salons/me/services/{salon_service['id']}", headers=headers)
        assert resp.status_code == 400

        client.post(f"/salons/me/bookings/{booking['id']}/cancel", headers=headers)
        assert client.delete(f"/salons/me/services/{salon_service['id']}", headers=headers).status_code == 200

    def test_owner_lists_bookings_by_day(self, client, owner, salon, salon_service):
        day = next_bookable_day()
        client.post(f"/salons/{salon['id']}/bookings", json=booking_payload(salon_service["id"]))
        bookings = client.get(
            "/salons/me/bookings", params={"date": day.isoformat()}, headers=auth_headers(owner)
        ).json()
        assert len(bookings) == 1
        other_day = client.get(
            "/salons/me/bookings", params={"date": (day + timedelta(days=1)).isoformat()}, headers=auth_headers(owner)
        ).json()
        assert other_day == []
