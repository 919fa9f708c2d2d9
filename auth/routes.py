# src/auth/routes.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.dependencies import get_current_user, get_token_service
from auth.schemas import AuthData, TokenClaims, UserCreate, UserLogin, UserResponse
from auth.services import AuthService
from auth.tokens import TokenService
from core.errors import NotFoundError
from core.responses import ApiResponse
from database import get_db

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse[AuthData], status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user."""
    token, new_user = AuthService.create_user(user, db, tokens)
    return ApiResponse(
        data=AuthData(token=token, user=UserResponse.model_validate(new_user)),
        message="Registration complete",
    )


@router.post("/login", response_model=ApiResponse[AuthData])
def login(
    user: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Login and return a JWT token."""
    token, authenticated_user = AuthService.authenticate_user(user.email, user.password, db, tokens)
    return ApiResponse(
        data=AuthData(token=token, user=UserResponse.model_validate(authenticated_user)),
        message="Login successful",
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
def read_users_me(
    current_user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get current user details."""
    user = AuthService.get_user(current_user.id, db)
    if user is None:
        raise NotFoundError("User not found")
    return ApiResponse(data=UserResponse.model_validate(user), message="Current user")
