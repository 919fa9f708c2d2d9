# src/license/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from auth.dependencies import get_optional_user, require_admin
from auth.schemas import TokenClaims
from core.responses import ApiResponse
from database import get_db
from license.schemas import LicenseCreate, LicenseData, LicenseList, LicenseResponse, LicenseUpdate
from license.services import LicenseService

router = APIRouter(prefix="/licenses", tags=["licenses"])


@router.get("", response_model=ApiResponse[LicenseList])
def get_licenses(
    db: Session = Depends(get_db),
    current_user: Optional[TokenClaims] = Depends(get_optional_user),
):
    """List licenses; inactive ones are only visible to admins."""
    licenses = LicenseService.list_licenses(current_user, db)
    return ApiResponse(
        data=LicenseList(licenses=[LicenseResponse.model_validate(l) for l in licenses]),
        message="Licenses retrieved",
    )


@router.post("", response_model=ApiResponse[LicenseData], status_code=status.HTTP_201_CREATED)
def create_license(
    license_data: LicenseCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    license = LicenseService.create_license(license_data, current_user, db)
    return ApiResponse(data=LicenseData(license=LicenseResponse.model_validate(license)), message="License created")


@router.put("", response_model=ApiResponse[LicenseData])
def update_license(
    license_data: LicenseUpdate,
    license_id: str = Query(..., alias="id"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    license = LicenseService.update_license(license_id, license_data, current_user, db)
    return ApiResponse(data=LicenseData(license=LicenseResponse.model_validate(license)), message="License updated")


@router.delete("", response_model=ApiResponse[None])
def delete_license(
    license_id: str = Query(..., alias="id"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    """Soft delete a license."""
    LicenseService.delete_license(license_id, current_user, db)
    return ApiResponse(data=None, message="License deactivated")
