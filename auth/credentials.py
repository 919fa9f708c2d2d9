# src/auth/credentials.py
import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from auth.models import Credential
from core.errors import ValidationError

logger = logging.getLogger(__name__)


class CredentialStore:
    """Holds password hashes and answers credential checks for a session."""
    pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    def verify_password(self, email: str, password: str) -> Optional[str]:
        """Return the user id for a matching email/password pair, else None."""
        if not email or not password:
            return None
        credential = self.db.query(Credential).filter(Credential.email == self.normalize_email(email)).first()
        if credential is None:
            return None
        if not self.pwd_context.verify(password, credential.password_hash):
            return None
        return credential.user_id

    def create_account(self, email: str, password: str) -> str:
        """Create credentials and return the new user id. Does not commit."""
        normalized = self.normalize_email(email)
        if not normalized or not password:
            raise ValidationError("Email and password are required")
        if self.db.query(Credential).filter(Credential.email == normalized).first():
            raise ValidationError("Email already registered", "email_taken")

        credential = Credential(email=normalized, password_hash=self.pwd_context.hash(password))
        self.db.add(credential)
        self.db.flush()
        logger.info(f"Created credentials for {normalized}")
        return credential.user_id
