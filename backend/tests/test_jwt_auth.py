from datetime import datetime, timedelta, timezone

import pytest
from jose import JWTError, jwt

from private_notes.utils.jwt_auth import decode_access_token

SECRET = "dev-secret-for-tests"


def make_token(secret=SECRET, minutes=15, **claims):
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    payload = {"sub": "user-1", "aud": "authenticated", "exp": int(exp.timestamp()), **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


def test_verified_decode():
    claims = decode_access_token(make_token(email="a@example.com"), SECRET)
    assert claims["sub"] == "user-1"
    assert claims["email"] == "a@example.com"


def test_wrong_secret_fails():
    with pytest.raises(JWTError):
        decode_access_token(make_token(secret="other"), SECRET)


def test_wrong_audience_fails():
    with pytest.raises(JWTError):
        decode_access_token(make_token(aud="anon"), SECRET)


def test_unverified_decode_still_checks_expiry():
    assert decode_access_token(make_token(secret="unknown"))["sub"] == "user-1"
    with pytest.raises(JWTError):
        decode_access_token(make_token(minutes=-1))


def test_unverified_decode_requires_subject():
    with pytest.raises(JWTError):
        decode_access_token(make_token(sub=""))
