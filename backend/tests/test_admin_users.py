class TestAdminUsers:
    def test_lists_profiles_with_stats(self, client, admin, finder, seeker, create_job):
        job = create_job(finder)
        create_job(finder, title="Another")
        client.post(f"/api/jobs/{job['id']}/apply", json={}, headers=seeker["headers"])
        client.post("/api/messages", json={"recipient_id": finder["profile"]["id"], "content": "hi"}, headers=seeker["headers"])
        client.post("/api/messages", json={"recipient_id": finder["profile"]["id"], "content": "again"}, headers=seeker["headers"])

        r = client.get("/api/admin/users", headers=admin["headers"])
        assert r.status_code == 200
        users = {u["id"]: u for u in r.json()}
        assert len(users) == 3
        assert users[finder["profile"]["id"]]["stats"] == {
            "total_jobs": 2, "total_applications": 0, "total_messages": 0,
        }
        assert users[seeker["profile"]["id"]]["stats"] == {
            "total_jobs": 0, "total_applications": 1, "total_messages": 2,
        }

    def test_search(self, client, admin, finder, seeker):
        r = client.get("/api/admin/users?q=fiona", headers=admin["headers"])
        assert [u["full_name"] for u in r.json()] == ["Fiona Finder"]

        r = client.get("/api/admin/users?q=SEEKER@", headers=admin["headers"])
        assert [u["full_name"] for u in r.json()] == ["Sam Seeker"]

    def test_requires_admin(self, client, seeker):
        assert client.get("/api/admin/users").status_code == 401
        assert client.get("/api/admin/users", headers=seeker["headers"]).status_code == 403

    def test_search_treats_wildcards_literally(self, client, admin, finder, seeker):
        assert client.get("/api/admin/users", params={"q": "%"}, headers=admin["headers"]).json() == []
        assert client.get("/api/admin/users", params={"q": "_"}, headers=admin["headers"]).json() == []

    def test_newest_first(self, client, admin, finder, seeker):
        r = client.get("/api/admin/users", headers=admin["headers"])
        assert [u["full_name"] for u in r.json()] == ["Sam Seeker", "Fiona Finder", "System Administrator"]
