import uuid

from sqlalchemy.orm import Session

from campusconnect.database import newest_first
from campusconnect.models.notification import Notification
from campusconnect.utils.timestamps import utc_now

NOTIFICATION_TYPES = {
    "JOB_APPROVED",
    "JOB_REJECTED",
    "APPLICATION_ACCEPTED",
    "APPLICATION_REJECTED",
    "NEW_MESSAGE",
}


def add_notification(db: Session, user_id: str, type: str, content: str) -> Notification:
    """Stage a notification on ``db``; the caller commits it with its own writes."""
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {type}")
    notification = Notification(
        id=str(uuid.uuid4()),
        user_id=user_id,
        type=type,
        content=content,
        created_at=utc_now(),
    )
    db.add(notification)
    return notification


def list_notifications(db: Session, user_id: str) -> list[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(*newest_first(Notification))
        .all()
    )
