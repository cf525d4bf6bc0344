"""Credentials — werkzeug password hashes and PyJWT bearer tokens."""

from datetime import timedelta

import jwt
import pytest

from merchcoin.core.errors import AuthenticationError
from merchcoin.infrastructure.credentials import (
    TokenIssuer, hash_password, verify_password,
)

SECRET = "unit-test-signing-key-0123456789abcdef"
OTHER_SECRET = "another-signing-key-0123456789abcdef"


def test_password_hash_verifies_only_the_matching_password():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password(hashed, "hunter2")
    assert not verify_password(hashed, "hunter3")


def test_token_round_trips_account_id():
    issuer = TokenIssuer(SECRET)
    assert issuer.verify(issuer.issue(17)) == 17


def test_expired_token_rejected():
    issuer = TokenIssuer(SECRET, ttl=timedelta(seconds=-5))
    with pytest.raises(AuthenticationError):
        issuer.verify(issuer.issue(1))


def test_token_signed_with_other_key_rejected():
    token = TokenIssuer(OTHER_SECRET).issue(1)
    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).verify(token)


def test_garbage_token_rejected():
    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).verify("not.a.jwt")


def test_non_numeric_subject_rejected():
    token = jwt.encode(
        {"sub": "alice", "exp": 4_102_444_800}, SECRET, algorithm="HS256",
    )
    with pytest.raises(AuthenticationError):
        TokenIssuer(SECRET).verify(token)
