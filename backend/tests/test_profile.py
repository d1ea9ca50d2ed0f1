class TestProfileOnboarding:
    def _payload(self, **overrides):
        payload = {
            "full_name": "Ada Lovelace",
            "role": "FINDER",
            "department": "Computer Science",
            "year": "Graduate Student",
            "skills": ["Python", "python", " React ", ""],
            "interests": ["AI/ML"],
        }
        payload.update(overrides)
        return payload

    def test_create_profile(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        r = client.post("/api/profile", json=self._payload(), headers=user["headers"])
        assert r.status_code == 201
        data = r.json()
        assert data["full_name"] == "Ada Lovelace"
        assert data["role"] == "FINDER"
        assert data["email"] == "ada@uni.edu"  # defaults to account email
        assert data["skills"] == ["Python", "React"]
        assert data["has_billing"] is False

    def test_role_defaults_to_seeker(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        payload = self._payload()
        del payload["role"]
        r = client.post("/api/profile", json=payload, headers=user["headers"])
        assert r.json()["role"] == "SEEKER"

    def test_requires_full_name(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        r = client.post("/api/profile", json=self._payload(full_name="   "), headers=user["headers"])
        assert r.status_code == 400
        assert r.json()["detail"] == "Full name is required"

    def test_requires_a_skill(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        r = client.post("/api/profile", json=self._payload(skills=[" "]), headers=user["headers"])
        assert r.status_code == 400
        assert r.json()["detail"] == "Please add at least one skill"

    def test_requires_an_interest(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        r = client.post("/api/profile", json=self._payload(interests=[]), headers=user["headers"])
        assert r.status_code == 400
        assert r.json()["detail"] == "Please add at least one interest"

    def test_rejects_unknown_role(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        r = client.post("/api/profile", json=self._payload(role="ADMIN"), headers=user["headers"])
        assert r.status_code == 400

    def test_rejects_second_profile(self, client, make_user):
        user = make_user("ada@uni.edu")
        r = client.post("/api/profile", json=self._payload(), headers=user["headers"])
        assert r.status_code == 409

    def test_requires_auth(self, client):
        r = client.post("/api/profile", json=self._payload())
        assert r.status_code == 401


class TestProfileReadUpdate:
    def test_get_own_profile_before_onboarding(self, client, make_user):
        user = make_user("ada@uni.edu", with_profile=False)
        r = client.get("/api/profile", headers=user["headers"])
        assert r.status_code == 404

    def test_get_own_profile(self, client, seeker):
        r = client.get("/api/profile", headers=seeker["headers"])
        assert r.status_code == 200
        assert r.json()["id"] == seeker["profile"]["id"]

    def test_switch_role(self, client, seeker):
        r = client.put("/api/profile", json={"role": "FINDER"}, headers=seeker["headers"])
        assert r.status_code == 200
        assert r.json()["role"] == "FINDER"
        assert r.json()["full_name"] == "Sam Seeker"

    def test_update_skills(self, client, seeker):
        r = client.put("/api/profile", json={"skills": ["Go", "GO", "Rust"]}, headers=seeker["headers"])
        assert r.json()["skills"] == ["Go", "Rust"]

    def test_update_rejects_empty_skills(self, client, seeker):
        r = client.put("/api/profile", json={"skills": []}, headers=seeker["headers"])
        assert r.status_code == 400

    def test_view_other_profile(self, client, seeker, finder):
        r = client.get(f"/api/profiles/{finder['profile']['id']}", headers=seeker["headers"])
        assert r.status_code == 200
        assert r.json()["full_name"] == "Fiona Finder"

    def test_view_missing_profile(self, client, seeker):
        r = client.get("/api/profiles/nope", headers=seeker["headers"])
        assert r.status_code == 404
