from datetime import datetime, timedelta

import pytest
import pytz
from jose import jwt

from core import security
from core.exceptions import ConfigurationError, UnauthenticatedError


def test_hash_is_salted_and_verifies():
    first = security.hash_password("s3cret")
    second = security.hash_password("s3cret")

    assert first != second
    assert "s3cret" not in first
    assert security.verify_password("s3cret", first)
    assert security.verify_password("s3cret", second)
    assert not security.verify_password("wrong", first)


def test_verify_against_corrupt_hash_is_false():
    assert security.verify_password("s3cret", "not-a-bcrypt-hash") is False


def test_long_passwords_are_handled_consistently():
    password = "x" * 100
    hashed = security.hash_password(password)
    assert security.verify_password(password, hashed)


def test_token_round_trip_carries_identity_and_role():
    token = security.create_access_token(user_id="abc", email="a@x.com", role="moderator")

    claims = security.decode_access_token(token)

    assert claims.user_id == "abc"
    assert claims.email == "a@x.com"
    assert claims.role == "moderator"
    assert claims.expires_at - claims.issued_at == 3600


def test_token_accepted_until_one_hour_after_issuance():
    issued_at = datetime.now(pytz.utc) - timedelta(seconds=3590)
    token = security.create_access_token("abc", "a@x.com", "user", issued_at=issued_at)

    assert security.decode_access_token(token).user_id == "abc"


def test_token_rejected_after_one_hour():
    issued_at = datetime.now(pytz.utc) - timedelta(seconds=3605)
    token = security.create_access_token("abc", "a@x.com", "user", issued_at=issued_at)

    with pytest.raises(UnauthenticatedError):
        security.decode_access_token(token)


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(UnauthenticatedError):
        security.decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode(
        {"sub": "abc", "role": "admin", "exp": 9999999999}, "other-secret", algorithm="HS256"
    )
    with pytest.raises(UnauthenticatedError):
        security.decode_access_token(forged)


def test_expired_and_malformed_tokens_share_one_message():
    issued_at = datetime.now(pytz.utc) - timedelta(hours=2)
    expired = security.create_access_token("abc", "a@x.com", "user", issued_at=issued_at)

    with pytest.raises(UnauthenticatedError) as expired_info:
        security.decode_access_token(expired)
    with pytest.raises(UnauthenticatedError) as malformed_info:
        security.decode_access_token("garbage")

    assert expired_info.value.message == malformed_info.value.message


def test_token_without_subject_is_rejected():
    token = jwt.encode(
        {"role": "admin", "exp": 9999999999},
        "test-jwt-secret-key-for-testing",
        algorithm="HS256",
    )
    with pytest.raises(UnauthenticatedError):
        security.decode_access_token(token)


@pytest.mark.parametrize("value", ["", "   "])
def test_missing_secret_refuses_to_issue_tokens(monkeypatch, value):
    monkeypatch.setenv("JWT_SECRET_KEY", value)
    with pytest.raises(ConfigurationError):
        security.create_access_token("abc", "a@x.com", "user")


def test_unset_secret_refuses_to_issue_tokens(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        security.create_access_token("abc", "a@x.com", "user")
