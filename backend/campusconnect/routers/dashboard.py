from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from campusconnect.database import get_db
from campusconnect.dependencies import get_current_profile
from campusconnect.models.application import Application
from campusconnect.models.job import Job
from campusconnect.models.notification import Notification
from campusconnect.models.profile import Profile
from campusconnect.schemas.dashboard import DashboardResponse, FinderStats, SeekerStats
from campusconnect.services.application_service import APPLICATION_STATUSES
from campusconnect.services.job_service import status_counts

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(profile: Profile = Depends(get_current_profile), db: Session = Depends(get_db)):
    # --- Seeker side: own applications by status ---
    application_rows = (
        db.query(Application.status, func.count(Application.id).label("n"))
        .filter(Application.applicant_id == profile.id)
        .group_by(Application.status)
        .all()
    )
    counted = {row.status: row.n for row in application_rows}
    applications_by_status = {status: counted.get(status, 0) for status in APPLICATION_STATUSES}

    # --- Finder side: own postings and the applications they drew ---
    jobs_by_status = status_counts(db, created_by_id=profile.id)
    jobs_total = jobs_by_status.pop("ALL")
    applications_received = (
        db.query(func.count(Application.id))
        .join(Job, Job.id == Application.job_id)
        .filter(Job.created_by_id == profile.id)
        .scalar()
    )

    notification_count = (
        db.query(func.count(Notification.id)).filter(Notification.user_id == profile.id).scalar()
    )

    return DashboardResponse(
        profile_id=profile.id,
        full_name=profile.full_name,
        role=profile.role,
        department=profile.department,
        seeker=SeekerStats(
            applications_total=sum(applications_by_status.values()),
            applications_by_status=applications_by_status,
        ),
        finder=FinderStats(
            jobs_total=jobs_total,
            jobs_by_status=jobs_by_status,
            applications_received=applications_received or 0,
        ),
        notification_count=notification_count or 0,
    )
