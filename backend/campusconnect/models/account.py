from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from campusconnect.database import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Text, primary_key=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)

    profile = relationship("Profile", back_populates="account", uselist=False, cascade="all, delete-orphan")
