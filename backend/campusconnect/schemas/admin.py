from pydantic import BaseModel


class UserStats(BaseModel):
    total_jobs: int = 0
    total_applications: int = 0
    total_messages: int = 0


class AdminUserResponse(BaseModel):
    id: str
    account_id: str
    full_name: str
    email: str | None
    avatar_url: str | None
    role: str
    department: str | None
    year: str | None
    created_at: str
    stats: UserStats
