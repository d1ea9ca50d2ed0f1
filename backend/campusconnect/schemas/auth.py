from pydantic import BaseModel


class SignupRequest(BaseModel):
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    expires_in_seconds: int


class ThrottleResponse(BaseModel):
    error: str
    retry_after_seconds: float


class AccountResponse(BaseModel):
    id: str
    email: str
    created_at: str
    is_admin: bool = False
    has_profile: bool = False
