# src/auth/models.py
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from core.time import utcnow
from database import Base


def new_id() -> str:
    return str(uuid4())


class Credential(Base):
    """Login credentials, owned by the credential store."""
    __tablename__ = "credentials"

    user_id: str = Column(String(36), primary_key=True, default=new_id)
    email: str = Column(String, unique=True, index=True, nullable=False)
    password_hash: str = Column(String, nullable=False)
    created_at: datetime = Column(DateTime, default=utcnow)


class User(Base):
    """Represents a user in the system."""
    __tablename__ = "users"

    id: str = Column(String(36), ForeignKey("credentials.user_id"), primary_key=True)
    email: str = Column(String, unique=True, index=True, nullable=False)
    name: str = Column(String, nullable=False)
    role: str = Column(String, nullable=False, default="user")
    institution_id: Optional[str] = Column(String(36), ForeignKey("institutions.id"), nullable=True, index=True)
    created_at: datetime = Column(DateTime, default=utcnow)
    updated_at: datetime = Column(DateTime, default=utcnow, onupdate=utcnow)

    institution = relationship("Institution", back_populates="users")
    subscriptions = relationship("Subscription", back_populates="user")
    admin_actions = relationship("AdminActionLog", back_populates="admin")


class AdminActionLog(Base):
    """Represents a log of admin actions."""
    __tablename__ = "admin_action_logs"

    id: str = Column(String(36), primary_key=True, default=new_id)
    admin_id: str = Column(String(36), ForeignKey("users.id"), nullable=False)
    action: str = Column(String, nullable=False)
    timestamp: datetime = Column(DateTime, nullable=False, default=utcnow)

    admin = relationship("User", back_populates="admin_actions")
