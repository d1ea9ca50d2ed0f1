from urllib.parse import parse_qs

import httpx
import pytest

from campusconnect.main import app
from campusconnect.models.profile import Profile
from campusconnect.services.billing_service import BillingClient, BillingError, get_billing_client


def _set_customer(test_db, profile_id, customer_id="cus_123"):
    db = test_db()
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    profile.billing_customer_id = customer_id
    db.commit()
    db.close()


class TestPortalSession:
    def _use_transport(self, handler):
        transport = httpx.MockTransport(handler)
        app.dependency_overrides[get_billing_client] = lambda: BillingClient("sk_test_123", transport=transport)

    def test_creates_session(self, client, test_db, seeker):
        _set_customer(test_db, seeker["profile"]["id"])
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"id": "bps_1", "url": "https://billing.stripe.com/p/session/abc"})

        self._use_transport(handler)
        r = client.post("/api/stripe/create-portal-session", headers={
            **seeker["headers"], "Origin": "https://campus.example.edu",
        })
        assert r.status_code == 200
        assert r.json() == {"url": "https://billing.stripe.com/p/session/abc"}
        assert seen["path"] == "/v1/billing_portal/sessions"
        assert seen["auth"] == "Bearer sk_test_123"
        assert seen["form"] == {
            "customer": ["cus_123"],
            "return_url": ["https://campus.example.edu/billing"],
        }

    def test_default_return_url(self, client, test_db, seeker):
        _set_customer(test_db, seeker["profile"]["id"])
        seen = {}

        def handler(request):
            seen["form"] = parse_qs(request.content.decode())
            return httpx.Response(200, json={"url": "https://billing.stripe.com/p/x"})

        self._use_transport(handler)
        client.post("/api/stripe/create-portal-session", headers=seeker["headers"])
        assert seen["form"]["return_url"] == ["http://localhost:3000/billing"]

    def test_requires_billing_customer(self, client, seeker):
        r = client.post("/api/stripe/create-portal-session", headers=seeker["headers"])
        assert r.status_code == 400
        assert r.json()["detail"] == "No Stripe customer found"

    def test_without_profile(self, client, make_user):
        user = make_user("fresh@uni.edu", with_profile=False)
        r = client.post("/api/stripe/create-portal-session", headers=user["headers"])
        assert r.status_code == 400

    def test_provider_failure(self, client, test_db, seeker):
        _set_customer(test_db, seeker["profile"]["id"])
        self._use_transport(lambda request: httpx.Response(402, json={"error": {"message": "card declined"}}))
        r = client.post("/api/stripe/create-portal-session", headers=seeker["headers"])
        assert r.status_code == 500
        assert r.json()["detail"] == "Failed to create portal session"

    def test_requires_auth(self, client):
        assert client.post("/api/stripe/create-portal-session").status_code == 401


class TestBillingClient:
    @pytest.mark.anyio
    async def test_missing_key(self):
        with pytest.raises(BillingError):
            await BillingClient("").create_portal_session("cus_1", "http://x/billing")

    @pytest.mark.anyio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = BillingClient("sk_test", transport=httpx.MockTransport(handler))
        with pytest.raises(BillingError, match="request failed"):
            await client.create_portal_session("cus_1", "http://x/billing")
