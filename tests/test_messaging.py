from conftest import auth_headers, create_user


class TestSupportConversation:
    def test_user_opens_conversation_with_first_message(self, client, customer):
        resp = client.post(
            "/conversations",
            json={"name": "Kunde", "phone": "12345678", "message": "Hej, kan I komme på lørdag?"},
            headers=auth_headers(customer),
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "open"
        assert body["phone"] == "+4512345678"
        assert body["unread_admin_count"] == 1
        assert [m["sender"] for m in body["messages"]] == ["user"]

    def test_opening_again_returns_same_conversation(self, client, customer):
        headers = auth_headers(customer)
        first = client.post("/conversations", json={}, headers=headers).json()
        second = client.post("/conversations", json={"message": "Igen"}, headers=headers).json()
        assert first["id"] == second["id"]

    def test_unread_counters_follow_each_side(self, client, admin, customer):
        user_headers = auth_headers(customer)
        conversation_id = client.post("/conversations", json={"message": "Hej"}, headers=user_headers).json()["id"]
        client.post("/conversations/mine/messages", json={"message": "Er I der?"}, headers=user_headers)

        admin_view = client.get(f"/conversations/{conversation_id}", headers=auth_headers(admin)).json()
        assert admin_view["unread_admin_count"] == 2

        client.post(f"/conversations/{conversation_id}/messages", json={"message": "Ja!"}, headers=auth_headers(admin))
        read = client.post(f"/conversations/{conversation_id}/read", headers=auth_headers(admin)).json()
        assert read["unread_admin_count"] == 0
        assert read["unread_user_count"] == 1

        mine = client.get("/conversations/mine", headers=user_headers).json()
        assert [m["sender"] for m in mine["messages"]] == ["user", "user", "admin"]
        assert all(m["read_at"] for m in mine["messages"] if m["sender"] == "user")

        assert client.post("/conversations/mine/read", headers=user_headers).json()["unread_user_count"] == 0

    def test_user_message_reopens_closed_conversation(self, client, admin, customer):
        user_headers = auth_headers(customer)
        conversation_id = client.post("/conversations", json={"message": "Hej"}, headers=user_headers).json()["id"]

        closed = client.post(f"/conversations/{conversation_id}/close", headers=auth_headers(admin)).json()
        assert closed["status"] == "closed"

        client.post("/conversations/mine/messages", json={"message": "Et spørgsmål mere"}, headers=user_headers)
        assert client.get("/conversations/mine", headers=user_headers).json()["status"] == "open"

    def test_admin_list_filters_status(self, client, db, admin, customer):
        other = create_user(db, "anden@example.com")
        client.post("/conversations", json={"message": "A"}, headers=auth_headers(customer))
        second = client.post("/conversations", json={"message": "B"}, headers=auth_headers(other)).json()
        client.post(f"/conversations/{second['id']}/close", headers=auth_headers(admin))

        open_only = client.get("/conversations", params={"status": "open"}, headers=auth_headers(admin)).json()
        assert [c["email"] for c in open_only] == [customer.email]

    def test_no_conversation_yet(self, client, customer):
        assert client.get("/conversations/mine", headers=auth_headers(customer)).status_code == 404

    def test_blank_message_rejected(self, client, customer):
        resp = client.post("/conversations/mine/messages", json={"message": "   "}, headers=auth_headers(customer))
        assert resp.status_code == 422

    def test_customers_cannot_read_other_conversations(self, client, customer):
        assert client.get("/conversations", headers=auth_headers(customer)).status_code == 403
