from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campusconnect.database import get_db
from campusconnect.dependencies import get_current_profile
from campusconnect.models.message import Message
from campusconnect.models.profile import Profile
from campusconnect.schemas.message import MessageCreate, MessageResponse
from campusconnect.services.errors import ServiceError
from campusconnect.services.message_service import list_messages, send_message

router = APIRouter(prefix="/messages", tags=["messages"])


def _message_to_response(m: Message) -> MessageResponse:
    return MessageResponse(
        id=m.id,
        sender_id=m.sender_id,
        recipient_id=m.recipient_id,
        content=m.content,
        created_at=m.created_at,
    )


@router.post("", response_model=MessageResponse, status_code=201)
async def create_message(
    req: MessageCreate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    try:
        message = send_message(db, profile, req.recipient_id, req.content)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _message_to_response(message)


@router.get("", response_model=list[MessageResponse])
async def my_messages(profile: Profile = Depends(get_current_profile), db: Session = Depends(get_db)):
    return [_message_to_response(m) for m in list_messages(db, profile)]
