# src/institution/routes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from auth.dependencies import get_optional_user, require_admin
from auth.schemas import TokenClaims
from core.responses import ApiResponse
from database import get_db
from institution.schemas import (
    InstitutionCreate,
    InstitutionData,
    InstitutionList,
    InstitutionResponse,
    InstitutionUpdate,
)
from institution.services import InstitutionService

router = APIRouter(prefix="/institutions", tags=["institutions"])


def _data(institution) -> InstitutionData:
    return InstitutionData(institution=InstitutionResponse.model_validate(institution))


@router.get("", response_model=ApiResponse[InstitutionList])
def get_institutions(
    db: Session = Depends(get_db),
    current_user: Optional[TokenClaims] = Depends(get_optional_user),
):
    """List institutions. Open to anonymous callers so the registration form can load them."""
    institutions = InstitutionService.list_institutions(current_user, db)
    return ApiResponse(
        data=InstitutionList(institutions=[InstitutionResponse.model_validate(i) for i in institutions]),
        message="Institutions retrieved",
    )


@router.post("", response_model=ApiResponse[InstitutionData], status_code=status.HTTP_201_CREATED)
def create_institution(
    institution_data: InstitutionCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    institution = InstitutionService.create_institution(institution_data, current_user, db)
    return ApiResponse(data=_data(institution), message="Institution created")


@router.put("", response_model=ApiResponse[InstitutionData])
def update_institution(
    institution_data: InstitutionUpdate,
    institution_id: str = Query(..., alias="id"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    institution = InstitutionService.update_institution(institution_id, institution_data, current_user, db)
    return ApiResponse(data=_data(institution), message="Institution updated")


@router.patch("/{institution_id}/toggle", response_model=ApiResponse[InstitutionData])
def toggle_institution(
    institution_id: str,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    """Toggle institution active state."""
    institution = InstitutionService.toggle_institution(institution_id, current_user, db)
    return ApiResponse(data=_data(institution), message="Institution status changed")


@router.delete("", response_model=ApiResponse[None])
def delete_institution(
    institution_id: str = Query(..., alias="id"),
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_admin),
):
    InstitutionService.delete_institution(institution_id, current_user, db)
    return ApiResponse(data=None, message="Institution deactivated")
