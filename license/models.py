# src/license/models.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from auth.models import new_id
from core.time import utcnow
from database import Base


class License(Base):
    """A purchasable license. max_users of -1 means unlimited."""
    __tablename__ = "licenses"

    id: str = Column(String(36), primary_key=True, default=new_id)
    name: str = Column(String, nullable=False)
    description: Optional[str] = Column(Text, nullable=True)
    price: int = Column(Integer, nullable=False)
    duration_months: int = Column(Integer, nullable=False)
    max_users: int = Column(Integer, nullable=False, default=-1)
    features: List[str] = Column(JSON, nullable=False, default=list)
    is_active: bool = Column(Boolean, nullable=False, default=True)
    created_at: datetime = Column(DateTime, default=utcnow)
    updated_at: datetime = Column(DateTime, default=utcnow, onupdate=utcnow)

    subscriptions = relationship("Subscription", back_populates="license")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_licenses_price_non_negative"),
        CheckConstraint("duration_months >= 1", name="ck_licenses_duration_positive"),
    )
