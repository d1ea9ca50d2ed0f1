from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from campusconnect.database import get_db, newest_first
from campusconnect.dependencies import get_current_account, get_current_profile, get_optional_profile
from campusconnect.models.account import Account
from campusconnect.models.application import Application
from campusconnect.models.job import Job
from campusconnect.models.profile import Profile
from campusconnect.routers.profile import _profile_summary
from campusconnect.schemas.application import (
    ApplicationCheckResponse,
    ApplicationCreate,
    ApplicationEnvelope,
    ApplicationJobSummary,
    ApplicationResponse,
)
from campusconnect.schemas.job import JobCreate, JobListResponse, JobResponse, JobUpdate
from campusconnect.services import application_service, job_service
from campusconnect.services.errors import ServiceError

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        type=job.type,
        description=job.description,
        requirements=job.requirements,
        duration=job.duration,
        compensation=job.compensation,
        location=job.location,
        team_size=job.team_size,
        tags=job.tags or [],
        status=job.status,
        rejection_reason=job.rejection_reason,
        is_published=job.is_published,
        is_filled=job.is_filled,
        applications_count=job.applications_count,
        created_by_id=job.created_by_id,
        approved_by=job.approved_by,
        approved_at=job.approved_at,
        created_at=job.created_at,
        updated_at=job.updated_at,
        created_by=_profile_summary(job.created_by) if job.created_by else None,
    )


def _application_to_response(application: Application) -> ApplicationResponse:
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        applicant_id=application.applicant_id,
        message=application.message,
        resume_url=application.resume_url,
        status=application.status,
        created_at=application.created_at,
        updated_at=application.updated_at,
        applicant=_profile_summary(application.applicant) if application.applicant else None,
        job=ApplicationJobSummary(id=application.job.id, title=application.job.title, type=application.job.type) if application.job else None,
    )


def _load_job(db: Session, job_id: str) -> Job:
    try:
        return job_service.get_job(db, job_id)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    req: JobCreate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    try:
        job = job_service.create_job(db, profile, req)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _job_to_response(job)


@router.get("", response_model=JobListResponse)
async def list_jobs(
    type: str | None = None,
    q: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    _account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_public_jobs(db, job_type=type, q=q, page=page, per_page=per_page)
    return JobListResponse(
        jobs=[_job_to_response(j) for j in jobs],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/mine", response_model=list[JobResponse])
async def list_my_jobs(profile: Profile = Depends(get_current_profile), db: Session = Depends(get_db)):
    jobs = (
        db.query(Job)
        .filter(Job.created_by_id == profile.id)
        .order_by(*newest_first(Job))
        .all()
    )
    return [_job_to_response(j) for j in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, _account: Account = Depends(get_current_account), db: Session = Depends(get_db)):
    return _job_to_response(_load_job(db, job_id))


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    req: JobUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    job = _load_job(db, job_id)
    try:
        job = job_service.update_job(db, job, profile, req)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _job_to_response(job)


@router.delete("/{job_id}")
async def delete_job(job_id: str, profile: Profile = Depends(get_current_profile), db: Session = Depends(get_db)):
    job = _load_job(db, job_id)
    try:
        job_service.delete_job(db, job, profile)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return {"message": "Job deleted"}


@router.post("/{job_id}/apply", response_model=ApplicationEnvelope, status_code=201)
async def apply_to_job(
    job_id: str,
    req: ApplicationCreate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    try:
        application = application_service.apply_to_job(
            db, job_id, profile, message=req.message, resume_url=req.resume_url
        )
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return ApplicationEnvelope(application=_application_to_response(application))


@router.get("/{job_id}/apply", response_model=ApplicationCheckResponse)
async def check_application(
    job_id: str,
    profile: Profile | None = Depends(get_optional_profile),
    db: Session = Depends(get_db),
):
    if profile is None:
        return ApplicationCheckResponse(has_applied=False)
    application = application_service.find_application(db, job_id, profile.id)
    return ApplicationCheckResponse(
        has_applied=application is not None,
        application=_application_to_response(application) if application else None,
    )


@router.get("/{job_id}/applications", response_model=list[ApplicationResponse])
async def list_job_applications(
    job_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    job = _load_job(db, job_id)
    try:
        applications = application_service.list_job_applications(db, job, profile)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return [_application_to_response(a) for a in applications]
