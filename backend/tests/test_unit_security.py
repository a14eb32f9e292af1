"""Unit tests for core/security.py (no database required)."""

import os
from datetime import timedelta

import pytest

# Ensure settings can be loaded without .env
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-unit-tests")

from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    verify_password,
)


# ── Password hashing ────────────────────────────────────────────────────────


class TestPasswordHashing:
    def test_hash_and_verify(self):
        password = "correct-horse-battery"
        hashed = get_password_hash(password)
        assert hashed != password
        assert verify_password(password, hashed)

    def test_wrong_password_rejected(self):
        hashed = get_password_hash("correct-password")
        assert not verify_password("wrong-password", hashed)

    def test_different_hashes_for_same_password(self):
        pw = "same-password"
        assert get_password_hash(pw) != get_password_hash(pw)  # random salt

    def test_malformed_hash_rejected(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")


# ── JWT tokens ───────────────────────────────────────────────────────────────


class TestJWT:
    def test_access_token_roundtrip(self):
        token = create_access_token({"sub": "user-123"})
        payload = decode_token(token)
        assert payload["sub"] == "user-123"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_refresh_token_roundtrip(self):
        payload = decode_token(create_refresh_token({"sub": "user-456"}))
        assert payload["sub"] == "user-456"
        assert payload["type"] == "refresh"

    def test_tokens_are_unique(self):
        """Two tokens minted in the same second must still differ."""
        assert create_refresh_token({"sub": "u"}) != create_refresh_token({"sub": "u"})

    def test_custom_expiry(self):
        token = create_access_token({"sub": "test"}, expires_delta=timedelta(minutes=5))
        assert "exp" in decode_token(token)

    def test_expired_token_raises(self):
        from jose import JWTError

        token = create_access_token({"sub": "test"}, expires_delta=timedelta(seconds=-10))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token_raises(self):
        from jose import JWTError

        parts = create_access_token({"sub": "test"}).split(".")
        parts[1] = parts[1] + "x"
        with pytest.raises(JWTError):
            decode_token(".".join(parts))

    def test_original_data_not_mutated(self):
        data = {"sub": "user-789"}
        create_access_token(data)
        assert data == {"sub": "user-789"}
