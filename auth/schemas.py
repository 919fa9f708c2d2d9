# src/auth/schemas.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, EmailStr, Field

Role = Literal["admin", "user"]


class UserCreate(BaseModel):
    """Schema for user registration."""
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    institution_id: str = Field(min_length=1, validation_alias=AliasChoices("institution_id", "institutionId"))


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str = Field(min_length=1)


class TokenClaims(BaseModel):
    """Identity carried inside an access token."""
    id: str
    email: str
    name: str
    role: Role
    institution_id: Optional[str] = None


class InstitutionSummary(BaseModel):
    name: str
    domain: str

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """Schema for user response."""
    id: str
    email: str
    name: str
    role: str
    institution_id: Optional[str] = None
    institution: Optional[InstitutionSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AuthData(BaseModel):
    """Token plus the user it was issued for."""
    token: str
    user: UserResponse


class UserList(BaseModel):
    users: List[UserResponse]


class RoleUpdate(BaseModel):
    role: Role


class AdminActionLogResponse(BaseModel):
    """Schema for admin action log response."""
    id: str
    admin_id: str
    action: str
    timestamp: datetime

    class Config:
        from_attributes = True


class AdminActionLogList(BaseModel):
    logs: List[AdminActionLogResponse]
