import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campusconnect.database import newest_first
from campusconnect.models.application import Application
from campusconnect.models.job import Job
from campusconnect.models.profile import Profile
from campusconnect.services.errors import NotFound, PermissionDenied, ValidationFailed
from campusconnect.services.job_service import get_job
from campusconnect.services.notification_service import add_notification
from campusconnect.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

DUPLICATE_APPLICATION = "You have already applied to this job"
APPLICATION_STATUSES = ("PENDING", "ACCEPTED", "REJECTED")
REVIEW_STATUSES = {"ACCEPTED", "REJECTED"}


def find_application(db: Session, job_id: str, applicant_id: str) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first()
    )


def apply_to_job(
    db: Session,
    job_id: str,
    applicant: Profile,
    message: str | None = None,
    resume_url: str | None = None,
) -> Application:
    """Submit ``applicant``'s application to a job.

    Checks run in order and the first failure wins: job exists, not the
    applicant's own posting, published, not filled, not applied before.
    The insert and the job's counter bump commit together; the unique
    (job, applicant) index rejects a concurrent duplicate that slipped
    past the lookup.
    """
    job = get_job(db, job_id)

    if job.created_by_id == applicant.id:
        raise ValidationFailed("You cannot apply to your own job posting")
    if not job.is_published:
        raise ValidationFailed("This job is not published yet")
    if job.is_filled:
        raise ValidationFailed("This position has been filled")
    if find_application(db, job_id, applicant.id):
        raise ValidationFailed(DUPLICATE_APPLICATION)

    now = utc_now()
    application = Application(
        id=str(uuid.uuid4()),
        job_id=job_id,
        applicant_id=applicant.id,
        message=message,
        resume_url=resume_url,
        status="PENDING",
        created_at=now,
        updated_at=now,
    )
    db.add(application)
    job.applications_count = Job.applications_count + 1
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Duplicate application for job %s by %s rejected by the store", job_id, applicant.id)
        raise ValidationFailed(DUPLICATE_APPLICATION) from exc

    db.refresh(application)
    logger.info("Application %s submitted to job %s", application.id, job_id)
    return application


def list_job_applications(db: Session, job: Job, owner: Profile) -> list[Application]:
    if job.created_by_id != owner.id:
        raise PermissionDenied("Only the job owner can view its applications")
    return (
        db.query(Application)
        .filter(Application.job_id == job.id)
        .order_by(*newest_first(Application))
        .all()
    )


def list_applicant_applications(db: Session, applicant: Profile) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.applicant_id == applicant.id)
        .order_by(*newest_first(Application))
        .all()
    )


def review_application(db: Session, application_id: str, owner: Profile, status: str) -> Application:
    if status not in REVIEW_STATUSES:
        raise ValidationFailed(f"Invalid status. Must be one of: {sorted(REVIEW_STATUSES)}")

    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise NotFound("Application not found")
    job = application.job
    if job.created_by_id != owner.id:
        raise PermissionDenied("Only the job owner can review applications")

    application.status = status
    application.updated_at = utc_now()
    if status == "ACCEPTED":
        add_notification(
            db,
            application.applicant_id,
            "APPLICATION_ACCEPTED",
            f'Your application to "{job.title}" has been accepted!',
        )
    else:
        add_notification(
            db,
            application.applicant_id,
            "APPLICATION_REJECTED",
            f'Your application to "{job.title}" was not selected.',
        )
    db.commit()
    db.refresh(application)
    return application
