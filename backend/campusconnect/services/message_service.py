import uuid

from sqlalchemy.orm import Session

from campusconnect.database import newest_first
from campusconnect.models.message import Message
from campusconnect.models.profile import Profile
from campusconnect.services.errors import NotFound, ValidationFailed
from campusconnect.services.notification_service import add_notification
from campusconnect.utils.timestamps import utc_now


def send_message(db: Session, sender: Profile, recipient_id: str, content: str) -> Message:
    content = content.strip()
    if not content:
        raise ValidationFailed("Message content is required")
    if recipient_id == sender.id:
        raise ValidationFailed("You cannot message yourself")
    recipient = db.query(Profile).filter(Profile.id == recipient_id).first()
    if not recipient:
        raise NotFound("Recipient not found")

    message = Message(
        id=str(uuid.uuid4()),
        sender_id=sender.id,
        recipient_id=recipient.id,
        content=content,
        created_at=utc_now(),
    )
    db.add(message)
    add_notification(db, recipient.id, "NEW_MESSAGE", f"New message from {sender.full_name}")
    db.commit()
    db.refresh(message)
    return message


def list_messages(db: Session, profile: Profile) -> list[Message]:
    return (
        db.query(Message)
        .filter((Message.sender_id == profile.id) | (Message.recipient_id == profile.id))
        .order_by(*newest_first(Message))
        .all()
    )
