from datetime import timedelta

import pytest
from jose import jwt

from courseload.application.services.token_service import TokenService
from courseload.core.exceptions import InvalidTokenException
from courseload.config import Settings


@pytest.fixture
def tokens():
    return TokenService("unit-secret", expires_minutes=60)


def test_issue_then_verify_returns_identity(tokens):
    token = tokens.issue(42)
    assert tokens.verify(token) == 42


def test_expiry_is_configured_window(tokens):
    claims = jwt.decode(tokens.issue(7), "unit-secret", algorithms=["HS256"])
    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == 60 * 60


def test_expired_token_is_rejected(tokens):
    token = tokens.issue(1, expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenException):
        tokens.verify(token)


def test_token_signed_with_other_secret_is_rejected(tokens):
    forged = TokenService("someone-else").issue(1)
    with pytest.raises(InvalidTokenException):
        tokens.verify(forged)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_rejected(tokens, token):
    with pytest.raises(InvalidTokenException):
        tokens.verify(token)


def test_non_numeric_subject_is_rejected(tokens):
    token = jwt.encode({"sub": "alice"}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenException):
        tokens.verify(token)


def test_from_settings_uses_configured_values():
    settings = Settings(_env_file=None, SECRET_KEY="s3", JWT_EXPIRATION_MINUTES=5)
    service = TokenService.from_settings(settings)
    assert service.secret_key == "s3"
    assert service.expires_minutes == 5
