from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from campusconnect.database import get_db
from campusconnect.dependencies import get_admin_emails, get_current_account, get_session_token
from campusconnect.models.account import Account
from campusconnect.models.profile import Profile
from campusconnect.schemas.auth import (
    AccountResponse,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    ThrottleResponse,
)
from campusconnect.services.admin_policy import is_admin_email
from campusconnect.services.errors import ServiceError
from campusconnect.services.identity_service import identity_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _account_to_response(account: Account, admin_emails: set[str], has_profile: bool = False) -> AccountResponse:
    return AccountResponse(
        id=account.id,
        email=account.email,
        created_at=account.created_at,
        is_admin=is_admin_email(account.email, admin_emails),
        has_profile=has_profile,
    )


@router.post("/signup", response_model=AccountResponse, status_code=201)
async def signup(
    req: SignupRequest,
    db: Session = Depends(get_db),
    admin_emails: set[str] = Depends(get_admin_emails),
):
    try:
        account = identity_service.signup(db, req.email, req.password)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _account_to_response(account, admin_emails)


@router.post("/login", response_model=LoginResponse | ThrottleResponse)
async def login(req: LoginRequest, request: Request, db: Session = Depends(get_db)):
    client_host = request.client.host if request.client else "unknown"
    result = identity_service.login(db, req.email, req.password, throttle_key=f"login:{client_host}")
    if result is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if "error" in result:
        raise HTTPException(status_code=429, detail=result)
    return LoginResponse(**result)


@router.post("/logout")
async def logout(token: str = Depends(get_session_token)):
    identity_service.logout(token)
    return {"message": "Logged out"}


@router.get("/me", response_model=AccountResponse)
async def me(
    account: Account = Depends(get_current_account),
    admin_emails: set[str] = Depends(get_admin_emails),
    db: Session = Depends(get_db),
):
    has_profile = db.query(Profile.id).filter(Profile.account_id == account.id).first() is not None
    return _account_to_response(account, admin_emails, has_profile=has_profile)
