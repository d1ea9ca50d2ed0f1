from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campusconnect.database import get_db
from campusconnect.dependencies import get_current_account, get_current_profile
from campusconnect.models.account import Account
from campusconnect.models.profile import Profile
from campusconnect.schemas.profile import ProfileCreate, ProfileResponse, ProfileSummary, ProfileUpdate
from campusconnect.services.errors import ServiceError
from campusconnect.services.profile_service import create_profile, update_profile

router = APIRouter(tags=["profile"])


def _profile_summary(profile: Profile) -> ProfileSummary:
    return ProfileSummary(
        id=profile.id,
        full_name=profile.full_name,
        email=profile.email,
        avatar_url=profile.avatar_url,
        role=profile.role,
    )


def _profile_to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        account_id=profile.account_id,
        full_name=profile.full_name,
        email=profile.email,
        avatar_url=profile.avatar_url,
        bio=profile.bio,
        role=profile.role,
        department=profile.department,
        year=profile.year,
        skills=profile.skills or [],
        interests=profile.interests or [],
        has_billing=bool(profile.billing_customer_id),
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.post("/profile", response_model=ProfileResponse, status_code=201)
async def create_own_profile(
    req: ProfileCreate,
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    try:
        profile = create_profile(db, account, req)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _profile_to_response(profile)


@router.get("/profile", response_model=ProfileResponse)
async def get_own_profile(profile: Profile = Depends(get_current_profile)):
    return _profile_to_response(profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_own_profile(
    req: ProfileUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    try:
        profile = update_profile(db, profile, req)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _profile_to_response(profile)


@router.get("/profiles/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    _account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_to_response(profile)
