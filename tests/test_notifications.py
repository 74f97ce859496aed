from conftest import auth_headers, create_user

from beautyboosters.domain.notifications.service import notify, notify_admins
from beautyboosters.models import Notification


def seed(db, user, count=2):
    for i in range(count):
        notify(db, user.id, f"Titel {i}", "Besked", "booking_request")
    db.commit()


class TestNotifyHelpers:
    def test_notify_admins_reaches_every_admin(self, db, admin):
        second = create_user(db, "admin2@beautyboosters.dk", roles=("admin",))
        assert notify_admins(db, "Hej", "Besked", "inquiry") == 2
        db.commit()
        recipients = {n.recipient_id for n in db.query(Notification).filter(Notification.type == "inquiry")}
        assert recipients == {admin.id, second.id}


class TestInbox:
    def test_unread_count_and_read_all(self, client, db, customer):
        seed(db, customer, 3)
        headers = auth_headers(customer)

        assert client.get("/notifications/unread-count", headers=headers).json() == {"unread": 3}
        assert client.post("/notifications/read-all", headers=headers).json() == {"updated": 3}
        assert client.get("/notifications/unread-count", headers=headers).json() == {"unread": 0}
        assert client.get("/notifications", params={"unread_only": True}, headers=headers).json() == []

    def test_mark_single_read(self, client, db, customer):
        seed(db, customer, 2)
        headers = auth_headers(customer)
        first = client.get("/notifications", headers=headers).json()[0]

        resp = client.post(f"/notifications/{first['id']}/read", headers=headers)
        assert resp.status_code == 200
        assert resp.json()["read_at"] is not None
        assert len(client.get("/notifications", params={"unread_only": True}, headers=headers).json()) == 1

    def test_cannot_read_someone_elses(self, client, db, customer):
        other = create_user(db, "anden@example.com")
        seed(db, other, 1)
        note_id = client.get("/notifications", headers=auth_headers(other)).json()[0]["id"]
        assert client.post(f"/notifications/{note_id}/read", headers=auth_headers(customer)).status_code == 404

    def test_requires_login(self, client):
        assert client.get("/notifications").status_code in (401, 403)
