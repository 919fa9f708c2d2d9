from datetime import datetime, timedelta

import pytest
from jose import jwt

from auth.schemas import TokenClaims
from auth.tokens import InvalidTokenError, TokenService
from core.errors import ConfigurationError

ISSUED_AT = datetime(2026, 3, 1, 9, 30, 0)


@pytest.fixture
def service():
    return TokenService("unit-secret")


@pytest.fixture
def claims():
    return TokenClaims(
        id="5b0c7c1e-3c55-4b1d-9d61-1f2b1f0b7a10",
        email="kim@hanbit.ac.kr",
        name="Kim",
        role="user",
        institution_id="inst-1",
    )


def test_verify_returns_issued_claims(service, claims):
    token = service.issue(claims, now=ISSUED_AT)
    assert service.verify(token, now=ISSUED_AT + timedelta(hours=1)) == claims


def test_token_carries_issue_and_expiry_times(service, claims):
    token = service.issue(claims, now=ISSUED_AT)
    payload = jwt.get_unverified_claims(token)
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_token_valid_until_just_before_expiry(service, claims):
    token = service.issue(claims, now=ISSUED_AT)
    assert service.verify(token, now=ISSUED_AT + timedelta(hours=24) - timedelta(seconds=1)) == claims


@pytest.mark.parametrize("offset", [timedelta(hours=24), timedelta(hours=24, seconds=1), timedelta(days=3)])
def test_token_invalid_at_or_after_expiry(service, claims, offset):
    token = service.issue(claims, now=ISSUED_AT)
    with pytest.raises(InvalidTokenError):
        service.verify(token, now=ISSUED_AT + offset)


def test_wrong_secret_is_rejected(service, claims):
    token = TokenService("another-secret").issue(claims, now=ISSUED_AT)
    with pytest.raises(InvalidTokenError):
        service.verify(token, now=ISSUED_AT)


def test_tampered_signature_is_rejected(service, claims):
    token = service.issue(claims, now=ISSUED_AT)
    header, payload, signature = token.split(".")
    flipped = ("B" if signature[0] == "A" else "A") + signature[1:]
    with pytest.raises(InvalidTokenError):
        service.verify(".".join([header, payload, flipped]), now=ISSUED_AT)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b", "a.b.c"])
def test_malformed_tokens_are_rejected(service, token):
    with pytest.raises(InvalidTokenError):
        service.verify(token, now=ISSUED_AT)


def test_truncated_token_is_rejected(service, claims):
    token = service.issue(claims, now=ISSUED_AT)
    with pytest.raises(InvalidTokenError):
        service.verify(token[:-10], now=ISSUED_AT)


def test_token_without_identity_claims_is_rejected(service):
    exp = int((ISSUED_AT + timedelta(hours=1)).timestamp()) + 10 ** 6
    token = jwt.encode({"sub": "x", "exp": exp}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        service.verify(token, now=ISSUED_AT)


def test_token_without_expiry_is_rejected(service, claims):
    token = jwt.encode(claims.model_dump(), "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        service.verify(token, now=ISSUED_AT)


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_is_a_configuration_error(secret):
    with pytest.raises(ConfigurationError):
        TokenService(secret)
