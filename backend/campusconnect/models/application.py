from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from campusconnect.database import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True)
    job_id = Column(Text, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    applicant_id = Column(Text, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    message = Column(Text)
    resume_url = Column(Text)
    status = Column(Text, nullable=False, default="PENDING")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("Profile", back_populates="applications")
