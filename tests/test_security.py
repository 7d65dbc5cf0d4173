# tests/test_security.py
import pytest
from jose import JWTError, jwt

from streamhub.core.security import (
    ALGORITHM,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_verifies_one_way():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert hashed.startswith("$argon2")
    assert verify_password("secret123", hashed)
    assert not verify_password("otra-cosa", hashed)
    assert not verify_password("secret123", "")


def test_token_carries_subject_and_expiry(settings):
    token = create_access_token(sub="42", settings=settings)
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "42"
    assert "exp" in claims
    assert decode_access_token(token, settings) == 42


def test_token_without_subject_is_rejected(settings):
    token = jwt.encode({"foo": "bar"}, settings.SECRET_KEY, algorithm=ALGORITHM)
    with pytest.raises(JWTError):
        decode_access_token(token, settings)

    token = jwt.encode({"sub": "abc"}, settings.SECRET_KEY, algorithm=ALGORITHM)
    with pytest.raises(JWTError):
        decode_access_token(token, settings)


def test_expired_token_is_rejected(settings):
    token = create_access_token(sub="1", settings=settings, expires_minutes=-1)
    with pytest.raises(JWTError):
        decode_access_token(token, settings)
