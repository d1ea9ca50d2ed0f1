from pydantic import BaseModel

from campusconnect.schemas.profile import ProfileSummary


class ApplicationCreate(BaseModel):
    message: str | None = None
    resume_url: str | None = None


class ApplicationStatusUpdate(BaseModel):
    status: str


class ApplicationJobSummary(BaseModel):
    id: str
    title: str
    type: str | None


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    message: str | None
    resume_url: str | None
    status: str
    created_at: str
    updated_at: str
    applicant: ProfileSummary | None = None
    job: ApplicationJobSummary | None = None


class ApplicationEnvelope(BaseModel):
    application: ApplicationResponse


class ApplicationCheckResponse(BaseModel):
    has_applied: bool
    application: ApplicationResponse | None = None
