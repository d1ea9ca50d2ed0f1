from pydantic import BaseModel

from campusconnect.schemas.profile import ProfileSummary


class JobCreate(BaseModel):
    title: str
    type: str | None = None
    description: str | None = None
    requirements: str | None = None
    duration: str | None = None
    compensation: str | None = None
    location: str | None = None
    team_size: str | None = None
    # Accepts ["a", "b"] or "a, b"
    tags: list[str] | str | None = None
    is_draft: bool = False


class JobUpdate(BaseModel):
    title: str | None = None
    type: str | None = None
    description: str | None = None
    requirements: str | None = None
    duration: str | None = None
    compensation: str | None = None
    location: str | None = None
    team_size: str | None = None
    tags: list[str] | str | None = None
    is_published: bool | None = None
    is_filled: bool | None = None


class JobResponse(BaseModel):
    id: str
    title: str
    type: str | None
    description: str | None
    requirements: str | None
    duration: str | None
    compensation: str | None
    location: str | None
    team_size: str | None
    tags: list[str] = []
    status: str
    rejection_reason: str | None
    is_published: bool
    is_filled: bool
    applications_count: int
    created_by_id: str
    approved_by: str | None
    approved_at: str | None
    created_at: str
    updated_at: str
    created_by: ProfileSummary | None = None


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
    page: int
    per_page: int


class AdminJobListResponse(BaseModel):
    jobs: list[JobResponse]
    counts: dict[str, int]
    current_filter: str


class JobDecisionRequest(BaseModel):
    action: str
    rejection_reason: str | None = None


class JobDecisionResponse(BaseModel):
    success: bool
    job: JobResponse
    message: str
