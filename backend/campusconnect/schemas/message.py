from pydantic import BaseModel


class MessageCreate(BaseModel):
    recipient_id: str
    content: str


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    content: str
    created_at: str
