from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campusconnect.database import get_db
from campusconnect.dependencies import get_current_profile
from campusconnect.models.notification import Notification
from campusconnect.models.profile import Profile
from campusconnect.schemas.notification import NotificationResponse
from campusconnect.services.notification_service import list_notifications

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_response(n: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=n.id,
        user_id=n.user_id,
        type=n.type,
        content=n.content,
        created_at=n.created_at,
    )


@router.get("", response_model=list[NotificationResponse])
async def my_notifications(profile: Profile = Depends(get_current_profile), db: Session = Depends(get_db)):
    return [_notification_to_response(n) for n in list_notifications(db, profile.id)]
