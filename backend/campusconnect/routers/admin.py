from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from campusconnect.config import settings
from campusconnect.database import get_db, newest_first
from campusconnect.dependencies import require_admin
from campusconnect.models.account import Account
from campusconnect.models.application import Application
from campusconnect.models.job import Job
from campusconnect.models.message import Message
from campusconnect.models.profile import Profile
from campusconnect.routers.jobs import _job_to_response
from campusconnect.schemas.admin import AdminUserResponse, UserStats
from campusconnect.schemas.job import AdminJobListResponse, JobDecisionRequest, JobDecisionResponse
from campusconnect.services import job_service
from campusconnect.services.errors import ServiceError

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/jobs", response_model=AdminJobListResponse)
async def list_jobs(status: str = "ALL", q: str | None = None, db: Session = Depends(get_db)):
    try:
        jobs, counts = job_service.list_jobs(db, status_filter=status, q=q)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return AdminJobListResponse(
        jobs=[_job_to_response(j) for j in jobs],
        counts=counts,
        current_filter=status,
    )


@router.post("/jobs/{job_id}/approve", response_model=JobDecisionResponse)
async def decide_job(
    job_id: str,
    req: JobDecisionRequest,
    admin: Account = Depends(require_admin),
    db: Session = Depends(get_db),
):
    # Approvals are attributed to the admin's profile, or the bare account when it has none
    admin_profile = db.query(Profile).filter(Profile.account_id == admin.id).first()
    approver_id = admin_profile.id if admin_profile else admin.id

    try:
        job, message = job_service.decide_job(
            db,
            job_id,
            req.action,
            approver_id,
            reason=req.rejection_reason,
            default_reason=settings.default_rejection_reason,
            strict=settings.strict_job_transitions,
        )
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return JobDecisionResponse(success=True, job=_job_to_response(job), message=message)


@router.get("/users", response_model=list[AdminUserResponse])
async def list_users(q: str | None = None, db: Session = Depends(get_db)):
    query = db.query(Profile)
    if q:
        query = query.filter(
            Profile.full_name.icontains(q, autoescape=True) | Profile.email.icontains(q, autoescape=True)
        )
    profiles = query.order_by(*newest_first(Profile)).all()

    job_counts = dict(
        db.query(Job.created_by_id, func.count(Job.id)).group_by(Job.created_by_id).all()
    )
    application_counts = dict(
        db.query(Application.applicant_id, func.count(Application.id)).group_by(Application.applicant_id).all()
    )
    message_counts = dict(
        db.query(Message.sender_id, func.count(Message.id)).group_by(Message.sender_id).all()
    )

    return [
        AdminUserResponse(
            id=p.id,
            account_id=p.account_id,
            full_name=p.full_name,
            email=p.email,
            avatar_url=p.avatar_url,
            role=p.role,
            department=p.department,
            year=p.year,
            created_at=p.created_at,
            stats=UserStats(
                total_jobs=job_counts.get(p.id, 0),
                total_applications=application_counts.get(p.id, 0),
                total_messages=message_counts.get(p.id, 0),
            ),
        )
        for p in profiles
    ]
