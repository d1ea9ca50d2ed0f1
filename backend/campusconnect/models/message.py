from sqlalchemy import Column, ForeignKey, Text
from campusconnect.database import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Text, primary_key=True)
    sender_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
