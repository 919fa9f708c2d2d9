# src/subscription/models.py
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from auth.models import new_id
from core.time import utcnow
from database import Base

SUBSCRIPTION_STATUSES = ("active", "expired", "cancelled")


class Subscription(Base):
    """Represents a user subscription to a license."""
    __tablename__ = "subscriptions"

    id: str = Column(String(36), primary_key=True, default=new_id)
    user_id: str = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    license_id: str = Column(String(36), ForeignKey("licenses.id"), nullable=False, index=True)
    institution_id: Optional[str] = Column(String(36), ForeignKey("institutions.id"), nullable=True, index=True)
    start_date: datetime = Column(DateTime, nullable=False)
    end_date: datetime = Column(DateTime, nullable=False, index=True)
    status: str = Column(String, nullable=False, default="active", index=True)
    payment_amount: int = Column(Integer, nullable=False)  # license price at purchase time
    created_at: datetime = Column(DateTime, default=utcnow)
    updated_at: datetime = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="subscriptions")
    license = relationship("License", back_populates="subscriptions")
    institution = relationship("Institution", back_populates="subscriptions")
