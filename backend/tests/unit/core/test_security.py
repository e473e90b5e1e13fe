"""
Unit Tests for Security Module
Tests for: password hashing, JWT access/refresh tokens
"""
import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt
from fastapi import HTTPException

from stats_api.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
)
from stats_api.core.config import settings


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_password_returns_different_value(self):
        password = "testpassword123"
        hashed = get_password_hash(password)

        assert hashed != password
        assert len(hashed) > 0

    def test_hash_password_different_each_time(self):
        """Bcrypt generates a new salt per hash"""
        password = "testpassword123"
        assert get_password_hash(password) != get_password_hash(password)

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123")
        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")
        assert verify_password("wrongpassword", hashed) is False

    def test_hash_long_password_truncated(self):
        """Passwords past bcrypt's 72 byte limit still verify"""
        long_password = "a" * 100
        hashed = get_password_hash(long_password)

        assert verify_password(long_password, hashed) is True
        assert verify_password("a" * 72, hashed) is True

    def test_hash_unicode_password(self):
        password = "mötdepässe-sécurisé"
        hashed = get_password_hash(password)
        assert verify_password(password, hashed) is True


class TestTokens:
    """Access and refresh tokens"""

    def test_access_token_has_type(self):
        token = create_access_token({"sub": "user123"})

        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["type"] == "access"
        assert payload["sub"] == "user123"

    def test_access_token_with_expiry(self):
        token = create_access_token({"sub": "user123"}, expires_delta=timedelta(hours=1))

        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        remaining = payload["exp"] - datetime.now(timezone.utc).timestamp()
        assert 3500 < remaining < 3700

    def test_refresh_token_has_type_and_longer_expiry(self):
        access = jwt.decode(create_access_token({"sub": "u"}), settings.JWT_SECRET_KEY,
                            algorithms=[settings.JWT_ALGORITHM])
        refresh = jwt.decode(create_refresh_token({"sub": "u"}), settings.JWT_SECRET_KEY,
                             algorithms=[settings.JWT_ALGORITHM])

        assert refresh["type"] == "refresh"
        assert refresh["exp"] > access["exp"]

    def test_token_pair(self):
        pair = create_token_pair("user123", "test@example.com")

        assert pair["token_type"] == "bearer"
        assert decode_token(pair["access_token"])["type"] == "access"
        assert decode_token(pair["refresh_token"])["type"] == "refresh"
        assert decode_token(pair["access_token"])["email"] == "test@example.com"


class TestDecodeToken:
    """Test token decoding"""

    def test_decode_valid_token(self):
        token = create_access_token({"sub": "user123", "email": "test@example.com"})

        payload = decode_token(token)

        assert payload["sub"] == "user123"
        assert payload["email"] == "test@example.com"

    def test_decode_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_token("invalid_token_string")

        assert exc_info.value.status_code == 401
        assert "Could not validate credentials" in exc_info.value.detail

    def test_decode_expired_token(self):
        expired_token = jwt.encode(
            {"sub": "user123", "exp": datetime.now(timezone.utc) - timedelta(hours=1), "type": "access"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        with pytest.raises(HTTPException) as exc_info:
            decode_token(expired_token)

        assert exc_info.value.status_code == 401

    def test_decode_wrong_secret(self):
        token = jwt.encode({"sub": "user123", "type": "access"}, "another-secret", algorithm="HS256")

        with pytest.raises(HTTPException):
            decode_token(token)
