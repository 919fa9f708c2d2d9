# src/institution/models.py
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from auth.models import new_id
from core.time import utcnow
from database import Base


class Institution(Base):
    """Represents an institution users register under."""
    __tablename__ = "institutions"

    id: str = Column(String(36), primary_key=True, default=new_id)
    name: str = Column(String, nullable=False, index=True)
    domain: str = Column(String, nullable=False)
    contact_email: Optional[str] = Column(String, nullable=True)
    is_active: bool = Column(Boolean, nullable=False, default=True)
    created_at: datetime = Column(DateTime, default=utcnow)
    updated_at: datetime = Column(DateTime, default=utcnow, onupdate=utcnow)

    users = relationship("User", back_populates="institution")
    subscriptions = relationship("Subscription", back_populates="institution")
