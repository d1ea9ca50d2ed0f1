from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from campusconnect.config import settings
from campusconnect.database import get_db
from campusconnect.models.account import Account
from campusconnect.models.profile import Profile
from campusconnect.services.admin_policy import is_admin_email
from campusconnect.services.identity_service import identity_service


async def get_session_token(authorization: str | None = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return authorization[7:]


async def get_current_account(
    token: str = Depends(get_session_token),
    db: Session = Depends(get_db),
) -> Account:
    account_id = identity_service.resolve(token)
    if account_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return account


def get_admin_emails() -> set[str]:
    """Admin allow-list; tests swap it through ``app.dependency_overrides``."""
    return settings.admin_emails


async def require_admin(
    account: Account = Depends(get_current_account),
    admin_emails: set[str] = Depends(get_admin_emails),
) -> Account:
    if not is_admin_email(account.email, admin_emails):
        raise HTTPException(status_code=403, detail="Forbidden: Admin access required")
    return account


async def get_optional_profile(
    account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
) -> Profile | None:
    return db.query(Profile).filter(Profile.account_id == account.id).first()


async def get_current_profile(profile: Profile | None = Depends(get_optional_profile)) -> Profile:
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
