# =============================================================================
# tests/test_auth.py - Password and Token Tests
# =============================================================================
# Unit tests for:
# - bcrypt password hashing and verification
# - Bearer token issuing, verification and expiry
# - Credential request validation
# =============================================================================

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from pydantic import ValidationError

from app.auth.models import RegisterRequest
from app.auth.tokens import ALGORITHM, TokenService
from app.exceptions import InvalidTokenError
from lib.passwords import hash_password, verify_password

SECRET = "test-secret-key-0123456789"


# =============================================================================
# Passwords
# =============================================================================

class TestPasswords:

    def test_hash_verifies(self):
        hashed = hash_password("secret1", rounds=4)

        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)

    def test_default_cost_factor_is_10(self):
        assert hash_password("secret1").startswith("$2b$10$")

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


# =============================================================================
# Tokens
# =============================================================================

class TestTokenService:

    @pytest.fixture
    def tokens(self):
        return TokenService(SECRET, expire_seconds=3600)

    def test_round_trip_claims(self, tokens):
        token = tokens.issue("user-1", "a@x.com")

        payload = tokens.verify(token)

        assert payload.sub == "user-1"
        assert payload.email == "a@x.com"
        assert payload.exp - payload.iat == 3600

    def test_valid_just_before_expiry(self, tokens):
        issued = datetime.now(timezone.utc) - timedelta(seconds=3590)

        assert tokens.verify(tokens.issue("user-1", "a@x.com", issued_at=issued)).sub == "user-1"

    def test_expired_one_second_past(self, tokens):
        issued = datetime.now(timezone.utc) - timedelta(seconds=3601)
        token = tokens.issue("user-1", "a@x.com", issued_at=issued)

        with pytest.raises(InvalidTokenError) as exc_info:
            tokens.verify(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Token has expired"

    def test_wrong_secret(self, tokens):
        forged = TokenService("another-secret-key-9876543210").issue("user-1", "a@x.com")

        with pytest.raises(InvalidTokenError):
            tokens.verify(forged)

    def test_tampered_payload(self, tokens):
        header, _, signature = tokens.issue("user-1", "a@x.com").split(".")
        other_payload = tokens.issue("admin", "root@x.com").split(".")[1]

        with pytest.raises(InvalidTokenError):
            tokens.verify(f"{header}.{other_payload}.{signature}")

    def test_missing_sub(self, tokens):
        exp = int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())
        token = jwt.encode({"email": "a@x.com", "exp": exp}, SECRET, algorithm=ALGORITHM)

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)

    def test_missing_exp(self, tokens):
        token = jwt.encode({"sub": "user-1"}, SECRET, algorithm=ALGORITHM)

        with pytest.raises(InvalidTokenError):
            tokens.verify(token)

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c"])
    def test_malformed(self, tokens, token):
        with pytest.raises(InvalidTokenError):
            tokens.verify(token)


# =============================================================================
# Request Models
# =============================================================================

class TestCredentials:

    def test_valid(self):
        request = RegisterRequest(email="a@x.com", password="secret1")

        assert request.email == "a@x.com"

    def test_rejects_password_over_72_bytes(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@x.com", password="é" * 40)

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a-at-x.com", password="secret1")
