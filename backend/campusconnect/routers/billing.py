import logging

from fastapi import APIRouter, Depends, Header, HTTPException

from campusconnect.config import settings
from campusconnect.dependencies import get_optional_profile
from campusconnect.models.profile import Profile
from campusconnect.schemas.billing import PortalSessionResponse
from campusconnect.services.billing_service import BillingClient, BillingError, get_billing_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stripe", tags=["billing"])


@router.post("/create-portal-session", response_model=PortalSessionResponse)
async def create_portal_session(
    origin: str | None = Header(None),
    profile: Profile | None = Depends(get_optional_profile),
    client: BillingClient = Depends(get_billing_client),
):
    if profile is None or not profile.billing_customer_id:
        raise HTTPException(status_code=400, detail="No Stripe customer found")

    return_url = f"{(origin or settings.app_url).rstrip('/')}/billing"
    try:
        session = await client.create_portal_session(profile.billing_customer_id, return_url)
    except BillingError as exc:
        logger.error("Error creating portal session for profile %s: %s", profile.id, exc)
        raise HTTPException(status_code=500, detail="Failed to create portal session") from exc
    return PortalSessionResponse(url=session["url"])
