# src/subscription/schemas.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from institution.schemas import InstitutionResponse
from license.schemas import LicenseResponse

SubscriptionStatus = Literal["active", "expired", "cancelled"]


class SubscriptionCreate(BaseModel):
    """Schema for creating a subscription.

    ``user_id`` is honoured only for admin callers.
    """
    license_id: str = Field(min_length=1)
    user_id: Optional[str] = None


class SubscriptionStatusUpdate(BaseModel):
    status: SubscriptionStatus


class SubscriberSummary(BaseModel):
    id: str
    name: str
    email: str
    role: str
    institution_id: Optional[str] = None

    class Config:
        from_attributes = True


class SubscriptionResponse(BaseModel):
    """Schema for subscription response."""
    id: str
    user_id: str
    license_id: str
    institution_id: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatus
    payment_amount: int
    created_at: datetime
    updated_at: datetime
    user: Optional[SubscriberSummary] = None
    license: Optional[LicenseResponse] = None
    institution: Optional[InstitutionResponse] = None

    class Config:
        from_attributes = True


class SubscriptionData(BaseModel):
    subscription: SubscriptionResponse


class SubscriptionList(BaseModel):
    subscriptions: List[SubscriptionResponse]
