from pydantic import BaseModel


class SeekerStats(BaseModel):
    applications_total: int = 0
    applications_by_status: dict[str, int] = {}


class FinderStats(BaseModel):
    jobs_total: int = 0
    jobs_by_status: dict[str, int] = {}
    applications_received: int = 0


class DashboardResponse(BaseModel):
    profile_id: str
    full_name: str
    role: str
    department: str | None
    seeker: SeekerStats
    finder: FinderStats
    notification_count: int = 0
