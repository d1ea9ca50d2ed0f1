import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campusconnect.models.account import Account
from campusconnect.models.profile import Profile
from campusconnect.schemas.profile import ProfileCreate, ProfileUpdate
from campusconnect.services.errors import Conflict, ValidationFailed
from campusconnect.utils.timestamps import utc_now

VALID_ROLES = {"SEEKER", "FINDER"}


def normalize_terms(values: list[str]) -> list[str]:
    """Strip, drop blanks and de-duplicate case-insensitively, keeping first spelling and order."""
    seen: set[str] = set()
    result = []
    for value in values:
        term = value.strip()
        if not term or term.lower() in seen:
            continue
        seen.add(term.lower())
        result.append(term)
    return result


def _validate(full_name: str | None, role: str | None, skills: list[str] | None, interests: list[str] | None):
    if full_name is not None and not full_name.strip():
        raise ValidationFailed("Full name is required")
    if role is not None and role not in VALID_ROLES:
        raise ValidationFailed(f"Invalid role. Must be one of: {sorted(VALID_ROLES)}")
    if skills is not None and not skills:
        raise ValidationFailed("Please add at least one skill")
    if interests is not None and not interests:
        raise ValidationFailed("Please add at least one interest")


def create_profile(db: Session, account: Account, req: ProfileCreate) -> Profile:
    skills = normalize_terms(req.skills)
    interests = normalize_terms(req.interests)
    _validate(req.full_name, req.role, skills, interests)

    if db.query(Profile).filter(Profile.account_id == account.id).first():
        raise Conflict("Profile already exists")

    now = utc_now()
    profile = Profile(
        id=str(uuid.uuid4()),
        account_id=account.id,
        full_name=req.full_name.strip(),
        email=req.email or account.email,
        avatar_url=req.avatar_url,
        bio=req.bio,
        role=req.role,
        department=req.department,
        year=req.year,
        skills=skills,
        interests=interests,
        created_at=now,
        updated_at=now,
    )
    db.add(profile)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("Profile already exists") from exc
    db.refresh(profile)
    return profile


def update_profile(db: Session, profile: Profile, req: ProfileUpdate) -> Profile:
    update_data = req.model_dump(exclude_unset=True)
    for key in ("skills", "interests"):
        if update_data.get(key) is not None:
            update_data[key] = normalize_terms(update_data[key])
    _validate(
        update_data.get("full_name"),
        update_data.get("role"),
        update_data.get("skills"),
        update_data.get("interests"),
    )

    for key, value in update_data.items():
        if value is None and key in ("full_name", "role", "skills", "interests"):
            continue
        if key == "full_name":
            value = value.strip()
        setattr(profile, key, value)
    profile.updated_at = utc_now()

    db.commit()
    db.refresh(profile)
    return profile
