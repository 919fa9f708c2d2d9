# src/license/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def _check_max_users(value: Optional[int]) -> Optional[int]:
    if value is not None and value != -1 and value < 1:
        raise ValueError("max_users must be -1 (unlimited) or at least 1")
    return value


class LicenseCreate(BaseModel):
    """Schema for creating a license."""
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: int = Field(ge=0)
    duration_months: int = Field(ge=1)
    max_users: int = -1
    features: List[str] = Field(default_factory=list)

    @field_validator("max_users")
    @classmethod
    def check_max_users(cls, value):
        return _check_max_users(value)


class LicenseUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    duration_months: Optional[int] = Field(default=None, ge=1)
    max_users: Optional[int] = None
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("max_users")
    @classmethod
    def check_max_users(cls, value):
        return _check_max_users(value)


class LicenseResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: int
    duration_months: int
    max_users: int
    features: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LicenseData(BaseModel):
    license: LicenseResponse


class LicenseList(BaseModel):
    licenses: List[LicenseResponse]
