from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from campusconnect.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    type = Column(Text)
    description = Column(Text)
    requirements = Column(Text)
    duration = Column(Text)
    compensation = Column(Text)
    location = Column(Text)
    team_size = Column(Text)
    tags = Column(JSON, nullable=False, default=list)
    status = Column(Text, nullable=False, default="PENDING")
    rejection_reason = Column(Text)
    is_published = Column(Boolean, nullable=False, default=False)
    is_filled = Column(Boolean, nullable=False, default=False)
    applications_count = Column(Integer, nullable=False, default=0)
    created_by_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    approved_by = Column(Text)
    approved_at = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    created_by = relationship("Profile", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
