from sqlalchemy import Column, ForeignKey, Text
from campusconnect.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    type = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
