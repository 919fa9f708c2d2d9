# src/license/services.py
from typing import List, Optional

from sqlalchemy.orm import Session

from admin.services import AdminService
from auth.schemas import TokenClaims
from core.errors import NotFoundError
from license.models import License
from license.schemas import LicenseCreate, LicenseUpdate


class LicenseService:
    @staticmethod
    def list_licenses(caller: Optional[TokenClaims], db: Session) -> List[License]:
        """Admins see every license; everyone else only the purchasable ones."""
        query = db.query(License)
        if caller is None or caller.role != "admin":
            query = query.filter(License.is_active == True)
        return query.order_by(License.created_at.desc()).all()

    @staticmethod
    def get_license(license_id: str, db: Session, active_only: bool = False) -> License:
        query = db.query(License).filter(License.id == license_id)
        if active_only:
            query = query.filter(License.is_active == True)
        license = query.first()
        if license is None:
            raise NotFoundError("License not found")
        return license

    @staticmethod
    def create_license(data: LicenseCreate, admin: TokenClaims, db: Session) -> License:
        license = License(**data.model_dump(), is_active=True)
        db.add(license)
        db.flush()
        AdminService.log_action(admin, f"Created license {license.id} ({license.name}, price {license.price})", db)
        db.commit()
        db.refresh(license)
        return license

    @staticmethod
    def update_license(license_id: str, data: LicenseUpdate, admin: TokenClaims, db: Session) -> License:
        """Apply a partial update. Existing subscriptions keep their captured price."""
        license = LicenseService.get_license(license_id, db)
        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k == "description"}
        for field, value in changes.items():
            setattr(license, field, value)
        AdminService.log_action(admin, f"Updated license {license_id}: {', '.join(sorted(changes)) or 'no changes'}", db)
        db.commit()
        db.refresh(license)
        return license

    @staticmethod
    def delete_license(license_id: str, admin: TokenClaims, db: Session) -> None:
        license = LicenseService.get_license(license_id, db)
        license.is_active = False
        AdminService.log_action(admin, f"Deactivated license {license_id}", db)
        db.commit()
