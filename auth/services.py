# src/auth/services.py
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from auth.credentials import CredentialStore
from auth.models import User
from auth.schemas import TokenClaims, UserCreate
from auth.tokens import TokenService
from core.errors import AuthenticationError, NotFoundError, ValidationError
from institution.models import Institution

logger = logging.getLogger(__name__)


class AuthService:
    @staticmethod
    def claims_for(user: User) -> TokenClaims:
        return TokenClaims(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            institution_id=user.institution_id,
        )

    @staticmethod
    def get_user(user_id: str, db: Session) -> Optional[User]:
        return db.query(User).options(joinedload(User.institution)).filter(User.id == user_id).first()

    @staticmethod
    def authenticate_user(email: str, password: str, db: Session, tokens: TokenService) -> Tuple[str, User]:
        """Check credentials and issue a token for the matching user."""
        logger.info(f"Login attempt for {email}")
        user_id = CredentialStore(db).verify_password(email, password)
        if user_id is None:
            logger.info(f"Login failed for {email}")
            raise AuthenticationError("Incorrect email or password", "invalid_credentials")

        user = AuthService.get_user(user_id, db)
        if user is None:
            logger.error(f"Credentials for {email} have no matching user row")
            raise NotFoundError("User profile not found")
        return tokens.issue(AuthService.claims_for(user)), user

    @staticmethod
    def create_user(user_data: UserCreate, db: Session, tokens: TokenService) -> Tuple[str, User]:
        """Register a regular user under an active institution and sign them in."""
        institution = db.query(Institution).filter(
            Institution.id == user_data.institution_id,
            Institution.is_active == True,
        ).first()
        if institution is None:
            raise NotFoundError("Institution not found")

        try:
            user_id = CredentialStore(db).create_account(user_data.email, user_data.password)
            new_user = User(
                id=user_id,
                email=CredentialStore.normalize_email(user_data.email),
                name=user_data.name,
                role="user",
                institution_id=institution.id,
            )
            db.add(new_user)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Registration for {user_data.email} lost a race on the unique email")
            raise ValidationError("Email already registered", "email_taken")
        except Exception:
            db.rollback()
            raise

        logger.info(f"Registered user {user_id} under institution {institution.id}")
        user = AuthService.get_user(user_id, db)
        return tokens.issue(AuthService.claims_for(user)), user
