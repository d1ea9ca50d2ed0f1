"""
Billing portal sessions through the Stripe REST API.
"""
import httpx

from campusconnect.config import settings


class BillingError(Exception):
    pass


class BillingClient:
    def __init__(
        self,
        api_key: str,
        api_base: str = "https://api.stripe.com",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self._transport = transport

    async def create_portal_session(self, customer_id: str, return_url: str) -> dict:
        """Create a customer portal session and return the provider's JSON payload."""
        if not self.api_key:
            raise BillingError("Stripe secret key is not configured")

        try:
            async with httpx.AsyncClient(
                base_url=self.api_base,
                transport=self._transport,
                timeout=10.0,
            ) as client:
                response = await client.post(
                    "/v1/billing_portal/sessions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    data={"customer": customer_id, "return_url": return_url},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise BillingError(
                f"Stripe returned {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BillingError(f"Stripe request failed: {exc}") from exc

        if "url" not in payload:
            raise BillingError("Stripe response did not include a portal url")
        return payload


def get_billing_client() -> BillingClient:
    return BillingClient(settings.stripe_secret_key, settings.stripe_api_base)
