class TestMessages:
    def test_send_message(self, client, finder, seeker):
        r = client.post("/api/messages", json={
            "recipient_id": finder["profile"]["id"],
            "content": "Is the project still open?",
        }, headers=seeker["headers"])
        assert r.status_code == 201
        assert r.json()["sender_id"] == seeker["profile"]["id"]

        inbox = client.get("/api/messages", headers=finder["headers"]).json()
        assert [m["content"] for m in inbox] == ["Is the project still open?"]

        notes = client.get("/api/notifications", headers=finder["headers"]).json()
        assert notes[0]["type"] == "NEW_MESSAGE"
        assert notes[0]["content"] == "New message from Sam Seeker"

    def test_conversation_newest_first(self, client, finder, seeker):
        lines = ["Hi!", "Is the project still open?", "Great, applying now", "Thanks"]
        for i, content in enumerate(lines):
            sender, recipient = (seeker, finder) if i % 2 == 0 else (finder, seeker)
            client.post("/api/messages", json={
                "recipient_id": recipient["profile"]["id"],
                "content": content,
            }, headers=sender["headers"])

        thread = client.get("/api/messages", headers=seeker["headers"]).json()
        assert [m["content"] for m in thread] == list(reversed(lines))

    def test_cannot_message_self(self, client, seeker):
        r = client.post("/api/messages", json={
            "recipient_id": seeker["profile"]["id"], "content": "hi me",
        }, headers=seeker["headers"])
        assert r.status_code == 400

    def test_empty_content(self, client, finder, seeker):
        r = client.post("/api/messages", json={
            "recipient_id": finder["profile"]["id"], "content": "   ",
        }, headers=seeker["headers"])
        assert r.status_code == 400

    def test_unknown_recipient(self, client, seeker):
        r = client.post("/api/messages", json={"recipient_id": "nobody", "content": "hello"}, headers=seeker["headers"])
        assert r.status_code == 404


class TestNotifications:
    def test_newest_first_and_private(self, client, admin, finder, seeker, create_job):
        first = create_job(finder, title="First")
        second = create_job(finder, title="Second")
        client.post(f"/api/admin/jobs/{first['id']}/approve", json={"action": "approve"}, headers=admin["headers"])
        client.post(f"/api/admin/jobs/{second['id']}/approve", json={"action": "reject"}, headers=admin["headers"])

        notes = client.get("/api/notifications", headers=finder["headers"]).json()
        assert [n["type"] for n in notes] == ["JOB_REJECTED", "JOB_APPROVED"]
        assert all(n["user_id"] == finder["profile"]["id"] for n in notes)

        assert client.get("/api/notifications", headers=seeker["headers"]).json() == []

    def test_requires_auth(self, client):
        assert client.get("/api/notifications").status_code == 401
