"""
Job lifecycle: creation by finders, owner edits, the public board and
the admin review flow (PENDING -> APPROVED / REJECTED).
"""
import logging
import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from campusconnect.database import newest_first
from campusconnect.models.job import Job
from campusconnect.models.profile import Profile
from campusconnect.schemas.job import JobCreate, JobUpdate
from campusconnect.services.errors import Conflict, NotFound, PermissionDenied, ValidationFailed
from campusconnect.services.notification_service import add_notification
from campusconnect.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

JOB_TYPES = {"ACADEMIC_PROJECT", "STARTUP_COLLABORATION", "PART_TIME_JOB", "COMPETITION_HACKATHON"}
JOB_STATUSES = ("PENDING", "APPROVED", "REJECTED", "POSTED")
STATUS_FILTER_ALL = "ALL"
PUBLIC_STATUSES = ("APPROVED", "POSTED")
DECISION_ACTIONS = {"approve", "reject"}

# Editing any of these on a rejected job sends it back for review
_CONTENT_FIELDS = {
    "title", "type", "description", "requirements", "duration",
    "compensation", "location", "team_size", "tags",
}


def _matches_text(q: str):
    # Literal substring match; % and _ in the query are not wildcards
    return Job.title.icontains(q, autoescape=True) | Job.description.icontains(q, autoescape=True)


def parse_tags(tags: list[str] | str | None) -> list[str]:
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    result: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in result:
            result.append(tag)
    return result


def get_job(db: Session, job_id: str) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job not found")
    return job


def create_job(db: Session, profile: Profile, req: JobCreate) -> Job:
    if profile.role != "FINDER":
        raise PermissionDenied("Only finders can post jobs")
    if not req.title or not req.title.strip():
        raise ValidationFailed("Title is required")
    if not req.is_draft and (not req.type or not req.description):
        raise ValidationFailed("Please fill in all required fields (Title, Type, Description)")
    if req.type is not None and req.type not in JOB_TYPES:
        raise ValidationFailed(f"Invalid job type. Must be one of: {sorted(JOB_TYPES)}")

    now = utc_now()
    job = Job(
        id=str(uuid.uuid4()),
        title=req.title.strip(),
        type=req.type,
        description=req.description,
        requirements=req.requirements,
        duration=req.duration,
        compensation=req.compensation,
        location=req.location,
        team_size=req.team_size,
        tags=parse_tags(req.tags),
        status="PENDING",
        is_published=not req.is_draft,
        is_filled=False,
        applications_count=0,
        created_by_id=profile.id,
        created_at=now,
        updated_at=now,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def update_job(db: Session, job: Job, profile: Profile, req: JobUpdate) -> Job:
    if job.created_by_id != profile.id:
        raise PermissionDenied("You can only edit your own job postings")

    update_data = req.model_dump(exclude_unset=True)
    if "title" in update_data and not (update_data["title"] or "").strip():
        raise ValidationFailed("Title is required")
    if update_data.get("type") is not None and update_data["type"] not in JOB_TYPES:
        raise ValidationFailed(f"Invalid job type. Must be one of: {sorted(JOB_TYPES)}")
    if "tags" in update_data:
        update_data["tags"] = parse_tags(update_data["tags"])

    for key, value in update_data.items():
        if key in ("is_published", "is_filled") and value is None:
            continue
        setattr(job, key, value)

    if job.is_published and (not job.type or not job.description):
        db.rollback()
        raise ValidationFailed("Please fill in all required fields (Title, Type, Description)")

    if job.status == "REJECTED" and _CONTENT_FIELDS & update_data.keys():
        job.status = "PENDING"
        job.rejection_reason = None
        logger.info("Job %s resubmitted for review", job.id)

    job.updated_at = utc_now()
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, job: Job, profile: Profile):
    if job.created_by_id != profile.id:
        raise PermissionDenied("You can only delete your own job postings")
    db.delete(job)
    db.commit()


def list_public_jobs(
    db: Session,
    job_type: str | None = None,
    q: str | None = None,
    page: int = 1,
    per_page: int = 20,
) -> tuple[list[Job], int]:
    query = db.query(Job).filter(Job.status.in_(PUBLIC_STATUSES), Job.is_published.is_(True))
    if job_type:
        query = query.filter(Job.type == job_type)
    if q:
        query = query.filter(_matches_text(q))

    total = query.count()
    jobs = (
        query.order_by(*newest_first(Job))
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return jobs, total


def status_counts(db: Session, created_by_id: str | None = None) -> dict[str, int]:
    """Per-status job totals, every status present, plus ``ALL`` as their sum."""
    query = db.query(Job.status, func.count(Job.id).label("n"))
    if created_by_id is not None:
        query = query.filter(Job.created_by_id == created_by_id)
    by_status = {row.status: row.n for row in query.group_by(Job.status).all()}

    counts = {status: by_status.get(status, 0) for status in JOB_STATUSES}
    counts[STATUS_FILTER_ALL] = sum(counts.values())
    return counts


def list_jobs(db: Session, status_filter: str = STATUS_FILTER_ALL, q: str | None = None) -> tuple[list[Job], dict[str, int]]:
    if status_filter != STATUS_FILTER_ALL and status_filter not in JOB_STATUSES:
        raise ValidationFailed(
            f"Invalid status filter. Must be one of: {[STATUS_FILTER_ALL, *JOB_STATUSES]}"
        )

    query = db.query(Job)
    if status_filter != STATUS_FILTER_ALL:
        query = query.filter(Job.status == status_filter)
    if q:
        query = query.filter(_matches_text(q))

    jobs = query.order_by(*newest_first(Job)).all()
    return jobs, status_counts(db)


def decide_job(
    db: Session,
    job_id: str,
    action: str,
    approver_id: str,
    reason: str | None = None,
    default_reason: str = "No reason provided",
    strict: bool = False,
) -> tuple[Job, str]:
    """Approve or reject a job and notify its creator in the same transaction.

    Without ``strict`` any job can be re-decided and the last decision wins.
    Returns the updated job and a message for the admin.
    """
    if action not in DECISION_ACTIONS:
        raise ValidationFailed('Invalid action. Must be "approve" or "reject"')

    job = get_job(db, job_id)
    if strict and job.status != "PENDING":
        raise Conflict(f"Job has already been reviewed (status {job.status})")

    now = utc_now()
    if action == "approve":
        job.status = "APPROVED"
        job.approved_by = approver_id
        job.approved_at = now
        job.rejection_reason = None
        add_notification(
            db,
            job.created_by_id,
            "JOB_APPROVED",
            f'Your job "{job.title}" has been approved and is now visible to seekers!',
        )
        message = "Job approved successfully"
    else:
        job.status = "REJECTED"
        job.rejection_reason = reason or default_reason
        job.approved_by = None
        job.approved_at = None
        add_notification(
            db,
            job.created_by_id,
            "JOB_REJECTED",
            f'Your job "{job.title}" was not approved. {reason or "Please review and resubmit."}',
        )
        message = "Job rejected successfully"
    job.updated_at = now

    db.commit()
    db.refresh(job)
    logger.info("Job %s %s by %s", job.id, job.status, approver_id)
    return job, message
