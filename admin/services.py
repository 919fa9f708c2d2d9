# src/admin/services.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from auth.models import AdminActionLog, User
from auth.schemas import TokenClaims
from core.errors import NotFoundError

logger = logging.getLogger(__name__)


class AdminService:
    @staticmethod
    def log_action(admin: TokenClaims, action: str, db: Session) -> None:
        """Record an admin mutation in the caller's transaction."""
        logger.info(f"Admin {admin.email}: {action}")
        db.add(AdminActionLog(admin_id=admin.id, action=action))

    @staticmethod
    def get_users(role: Optional[str], institution_id: Optional[str], db: Session) -> List[User]:
        query = db.query(User).options(joinedload(User.institution))
        if role:
            query = query.filter(User.role == role)
        if institution_id:
            query = query.filter(User.institution_id == institution_id)
        return query.order_by(User.created_at.desc()).all()

    @staticmethod
    def update_user_role(user_id: str, role: str, admin: TokenClaims, db: Session) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        user.role = role
        AdminService.log_action(admin, f"Changed role of user {user_id} to {role}", db)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_logs(db: Session) -> List[AdminActionLog]:
        return db.query(AdminActionLog).order_by(AdminActionLog.timestamp.desc()).all()
