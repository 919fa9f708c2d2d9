# src/admin/routes.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from admin.services import AdminService
from auth.dependencies import require_admin
from auth.schemas import (
    AdminActionLogList,
    AdminActionLogResponse,
    RoleUpdate,
    TokenClaims,
    UserList,
    UserResponse,
)
from core.responses import ApiResponse
from database import get_db

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=ApiResponse[UserList])
def get_users(
    role: Optional[str] = None,
    institution_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Retrieve users with optional role and institution filters."""
    users = AdminService.get_users(role, institution_id, db)
    return ApiResponse(
        data=UserList(users=[UserResponse.model_validate(u) for u in users]),
        message="Users retrieved",
    )


@router.patch("/users/{user_id}/role", response_model=ApiResponse[UserResponse])
def update_user_role(
    user_id: str,
    role_data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    """Change a user's role."""
    user = AdminService.update_user_role(user_id, role_data.role, current_user, db)
    return ApiResponse(data=UserResponse.model_validate(user), message="Role updated")


@router.get("/logs", response_model=ApiResponse[AdminActionLogList])
def get_admin_logs(db: Session = Depends(get_db)):
    """Retrieve admin action logs."""
    logs = AdminService.get_logs(db)
    return ApiResponse(
        data=AdminActionLogList(logs=[AdminActionLogResponse.model_validate(log) for log in logs]),
        message="Admin logs retrieved",
    )
