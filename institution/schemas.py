# src/institution/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class InstitutionCreate(BaseModel):
    """Schema for creating an institution."""
    name: str = Field(min_length=1)
    domain: str = Field(min_length=1)
    contact_email: Optional[EmailStr] = None
    is_active: bool = True


class InstitutionUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""
    name: Optional[str] = Field(default=None, min_length=1)
    domain: Optional[str] = Field(default=None, min_length=1)
    contact_email: Optional[EmailStr] = None
    is_active: Optional[bool] = None


class InstitutionResponse(BaseModel):
    id: str
    name: str
    domain: str
    contact_email: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InstitutionData(BaseModel):
    institution: InstitutionResponse


class InstitutionList(BaseModel):
    institutions: List[InstitutionResponse]
