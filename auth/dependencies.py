# src/auth/dependencies.py
"""Request identity and role gating.

Identity comes only from the bearer token; no data-store lookup happens here.
``authorize`` returns a result value instead of writing a response, and the
FastAPI dependencies below turn a ``Rejected`` result into exactly one raised
error, so a route body never runs after a rejection.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.schemas import TokenClaims
from auth.tokens import InvalidTokenError, TokenService
from core.errors import AuthenticationError, AuthorizationError, ServiceUnavailableError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Authorized:
    claims: TokenClaims


@dataclass(frozen=True)
class Rejected:
    status_code: int
    message: str


AuthResult = Union[Authorized, Rejected]


def authenticate(token: Optional[str], token_service: TokenService) -> Optional[TokenClaims]:
    """Resolve a raw bearer token to claims. Never raises; bad tokens yield None."""
    if not token:
        return None
    try:
        return token_service.verify(token)
    except InvalidTokenError as exc:
        logger.info(f"Rejected bearer token: {exc}")
        return None


def authorize(claims: Optional[TokenClaims], role: Optional[str] = None) -> AuthResult:
    if claims is None:
        return Rejected(401, "Authentication required")
    if role is not None and claims.role != role:
        return Rejected(403, "Admin access required" if role == "admin" else f"Role '{role}' required")
    return Authorized(claims)


def get_token_service(request: Request) -> TokenService:
    token_service = getattr(request.app.state, "token_service", None)
    if token_service is None:
        raise ServiceUnavailableError("Authentication is not configured")
    return token_service


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> Optional[TokenClaims]:
    """Claims for the caller, or None for anonymous or invalid tokens."""
    token = credentials.credentials if credentials is not None else None
    return authenticate(token, token_service)


def _enforce(result: AuthResult) -> TokenClaims:
    if isinstance(result, Authorized):
        return result.claims
    if result.status_code == 401:
        raise AuthenticationError(result.message)
    raise AuthorizationError(result.message)


def get_current_user(claims: Optional[TokenClaims] = Depends(get_optional_user)) -> TokenClaims:
    """Retrieve the current authenticated caller."""
    return _enforce(authorize(claims))


def require_admin(claims: Optional[TokenClaims] = Depends(get_optional_user)) -> TokenClaims:
    """Ensure the caller has admin role."""
    return _enforce(authorize(claims, "admin"))
