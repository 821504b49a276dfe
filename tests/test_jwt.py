"""Token service tests.

Learn: Every invalid token (expired, forged, malformed, or missing a
claim) must raise the same AuthError with the same message.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from taskify.auth.jwt import INVALID_TOKEN, TokenService
from taskify.config import Settings
from taskify.errors import AuthError

SECRET = "unit-test-secret"


@pytest.fixture
def tokens():
    return TokenService(SECRET, ttl=timedelta(hours=24))


def test_issue_then_validate_returns_subject(tokens):
    token = tokens.issue("alice@example.com")
    assert tokens.validate(token) == "alice@example.com"


def test_token_carries_expiry_ttl_after_issue(tokens):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    token = tokens.issue("alice@example.com", now=now)
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 24 * 3600
    assert claims["sub"] == "alice@example.com"


def test_expired_token_rejected(tokens):
    """Structure and signature are fine; only the expiry has passed."""
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = tokens.issue("alice@example.com", now=issued)
    with pytest.raises(AuthError) as exc:
        tokens.validate(token)
    assert str(exc.value) == INVALID_TOKEN


def test_token_signed_with_other_secret_rejected(tokens):
    forged = TokenService("some-other-secret").issue("alice@example.com")
    with pytest.raises(AuthError) as exc:
        tokens.validate(forged)
    assert str(exc.value) == INVALID_TOKEN


def test_tampered_payload_rejected(tokens):
    header, _, signature = tokens.issue("alice@example.com").split(".")
    other_payload = TokenService(SECRET).issue("bob@example.com").split(".")[1]
    with pytest.raises(AuthError):
        tokens.validate(f"{header}.{other_payload}.{signature}")


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "a.b"])
def test_malformed_token_rejected(tokens, token):
    with pytest.raises(AuthError) as exc:
        tokens.validate(token)
    assert str(exc.value) == INVALID_TOKEN


def test_token_without_expiry_rejected(tokens):
    token = jwt.encode(
        {"sub": "alice@example.com", "iat": datetime.now(timezone.utc)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(AuthError):
        tokens.validate(token)


def test_token_with_none_algorithm_rejected(tokens):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "alice@example.com", "iat": now, "exp": now + timedelta(hours=1)},
        None,
        algorithm="none",
    )
    with pytest.raises(AuthError):
        tokens.validate(token)


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService("")


def test_from_settings_uses_configured_ttl():
    svc = TokenService.from_settings(
        Settings(jwt_secret="s3cret", token_expire_minutes=5)
    )
    assert svc.ttl == timedelta(minutes=5)
    assert svc.validate(svc.issue("carol@example.com")) == "carol@example.com"
