# src/auth/tokens.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from pydantic import ValidationError as SchemaError

from auth.schemas import TokenClaims
from core.errors import ConfigurationError
from core.time import utcnow


class InvalidTokenError(Exception):
    """Token is malformed, wrongly signed, incomplete or expired."""


def _epoch(moment: datetime) -> int:
    return int(moment.replace(tzinfo=timezone.utc).timestamp())


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256", expires_minutes: int = 60 * 24):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)

    def issue(self, claims: TokenClaims, now: Optional[datetime] = None) -> str:
        """Create a JWT access token for the given claims."""
        issued_at = now or utcnow()
        to_encode: Dict[str, Any] = claims.model_dump()
        to_encode.update({
            "iat": _epoch(issued_at),
            "exp": _epoch(issued_at + self.expires_delta),
        })
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> TokenClaims:
        """Return the claims of a valid token, raising InvalidTokenError otherwise.

        Expiry is checked against ``now`` rather than the wall clock so the
        result depends only on the token, the secret and the given time.
        """
        if not token:
            raise InvalidTokenError("token_blank")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError("token_invalid") from exc

        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError("token_missing_exp")
        if _epoch(now or utcnow()) >= exp:
            raise InvalidTokenError("token_expired")

        try:
            return TokenClaims.model_validate(payload)
        except SchemaError as exc:
            raise InvalidTokenError("token_claims_invalid") from exc
