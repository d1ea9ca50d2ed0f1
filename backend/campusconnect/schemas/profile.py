from pydantic import BaseModel


class ProfileCreate(BaseModel):
    full_name: str
    email: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    role: str = "SEEKER"
    department: str | None = None
    year: str | None = None
    skills: list[str] = []
    interests: list[str] = []


class ProfileUpdate(BaseModel):
    full_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    role: str | None = None
    department: str | None = None
    year: str | None = None
    skills: list[str] | None = None
    interests: list[str] | None = None


class ProfileSummary(BaseModel):
    id: str
    full_name: str
    email: str | None
    avatar_url: str | None
    role: str


class ProfileResponse(BaseModel):
    id: str
    account_id: str
    full_name: str
    email: str | None
    avatar_url: str | None
    bio: str | None
    role: str
    department: str | None
    year: str | None
    skills: list[str]
    interests: list[str]
    has_billing: bool = False
    created_at: str
    updated_at: str
