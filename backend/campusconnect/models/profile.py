from sqlalchemy import JSON, Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from campusconnect.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Text, primary_key=True)
    account_id = Column(Text, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, unique=True)
    full_name = Column(Text, nullable=False)
    email = Column(Text)
    avatar_url = Column(Text)
    bio = Column(Text)
    role = Column(Text, nullable=False, default="SEEKER")
    department = Column(Text)
    year = Column(Text)
    skills = Column(JSON, nullable=False, default=list)
    interests = Column(JSON, nullable=False, default=list)
    billing_customer_id = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    account = relationship("Account", back_populates="profile")
    jobs = relationship("Job", back_populates="created_by", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="applicant", cascade="all, delete-orphan")
