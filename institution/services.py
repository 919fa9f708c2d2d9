# src/institution/services.py
from typing import List, Optional

from sqlalchemy.orm import Session

from admin.services import AdminService
from auth.schemas import TokenClaims
from core.errors import NotFoundError
from institution.models import Institution
from institution.schemas import InstitutionCreate, InstitutionUpdate


class InstitutionService:
    @staticmethod
    def list_institutions(caller: Optional[TokenClaims], db: Session) -> List[Institution]:
        """Active institutions for everyone; admins also see inactive ones."""
        query = db.query(Institution)
        if caller is None or caller.role != "admin":
            query = query.filter(Institution.is_active == True)
        return query.order_by(Institution.name).all()

    @staticmethod
    def get_institution(institution_id: str, db: Session) -> Institution:
        institution = db.query(Institution).filter(Institution.id == institution_id).first()
        if institution is None:
            raise NotFoundError("Institution not found")
        return institution

    @staticmethod
    def create_institution(data: InstitutionCreate, admin: TokenClaims, db: Session) -> Institution:
        institution = Institution(**data.model_dump())
        db.add(institution)
        db.flush()
        AdminService.log_action(admin, f"Created institution {institution.id} ({institution.name})", db)
        db.commit()
        db.refresh(institution)
        return institution

    @staticmethod
    def update_institution(institution_id: str, data: InstitutionUpdate, admin: TokenClaims, db: Session) -> Institution:
        institution = InstitutionService.get_institution(institution_id, db)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "contact_email":
                continue
            setattr(institution, field, value)
        AdminService.log_action(admin, f"Updated institution {institution_id}", db)
        db.commit()
        db.refresh(institution)
        return institution

    @staticmethod
    def toggle_institution(institution_id: str, admin: TokenClaims, db: Session) -> Institution:
        institution = InstitutionService.get_institution(institution_id, db)
        institution.is_active = not institution.is_active
        AdminService.log_action(admin, f"Set institution {institution_id} active={institution.is_active}", db)
        db.commit()
        db.refresh(institution)
        return institution

    @staticmethod
    def delete_institution(institution_id: str, admin: TokenClaims, db: Session) -> None:
        """Soft delete: the row stays so users and subscriptions keep their reference."""
        institution = InstitutionService.get_institution(institution_id, db)
        institution.is_active = False
        AdminService.log_action(admin, f"Deactivated institution {institution_id}", db)
        db.commit()
