"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from warden_auth.exceptions import InvalidTokenError
from warden_auth.services import JWTService


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secret(self):
        """Test that service initializes with valid secret."""
        service = JWTService(secret_key="test-secret-key")
        payload = service.verify_token(service.create_token(uuid4()))
        expected = datetime.now(tz=timezone.utc) + timedelta(days=30)
        assert abs((payload.exp - expected).total_seconds()) < 60

    def test_init_with_empty_secret_raises(self):
        """Test that empty secret raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")

    def test_init_with_custom_expiry(self):
        """Test that a custom lifetime is used."""
        service = JWTService(secret_key="test-secret", token_expire_days=7)
        payload = service.verify_token(service.create_token(uuid4()))
        expected = datetime.now(tz=timezone.utc) + timedelta(days=7)
        assert abs((payload.exp - expected).total_seconds()) < 60


class TestTokens:
    """Tests for token creation and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(secret_key="test-secret-key-12345")
        self.user_id = uuid4()

    def test_create_token(self):
        """Test that a token is created successfully."""
        token = self.service.create_token(user_id=self.user_id)

        assert isinstance(token, str)
        assert token.count(".") == 2

    def test_verify_valid_token(self):
        """Test that a valid token round-trips its user id."""
        token = self.service.create_token(user_id=self.user_id)

        payload = self.service.verify_token(token)

        assert payload.user_id == self.user_id
        assert payload.token_id
        assert payload.exp > datetime.now(tz=timezone.utc)

    def test_default_expiry_uses_lifetime(self):
        """Test that the default expiry lies one lifetime ahead."""
        before = datetime.now(tz=timezone.utc)
        token = self.service.create_token(user_id=self.user_id)

        payload = self.service.verify_token(token)

        expected = before + timedelta(days=30)
        assert abs((payload.exp - expected).total_seconds()) < 5

    def test_explicit_expiry_is_kept(self):
        """Test that an explicit expiry lands in the exp claim."""
        expires_at = datetime(2099, 1, 1, 12, 30, tzinfo=timezone.utc)

        token = self.service.create_token(self.user_id, expires_at=expires_at)

        assert self.service.verify_token(token).exp == expires_at

    def test_tokens_for_same_user_differ(self):
        """Test that the jti claim keeps tokens unique."""
        first = self.service.create_token(user_id=self.user_id)
        second = self.service.create_token(user_id=self.user_id)

        assert first != second

    def test_claims_layout(self):
        """Test that the token carries sub, jti, iat and exp."""
        token = self.service.create_token(user_id=self.user_id)

        claims = jwt.decode(
            token,
            "test-secret-key-12345",
            algorithms=[JWTService.ALGORITHM],
        )

        assert claims["sub"] == str(self.user_id)
        assert set(claims) == {"sub", "jti", "iat", "exp"}

    def test_verify_expired_token_raises(self):
        """Test that expired token raises InvalidTokenError."""
        token = self.service.create_token(
            user_id=self.user_id,
            expires_at=datetime.now(tz=timezone.utc) - timedelta(seconds=1),
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            self.service.verify_token(token)

    def test_verify_invalid_token_raises(self):
        """Test that invalid token raises InvalidTokenError."""
        with pytest.raises(InvalidTokenError):
            self.service.verify_token("invalid.token.string")

    def test_verify_tampered_token_raises(self):
        """Test that tampered token raises InvalidTokenError."""
        token = self.service.create_token(user_id=self.user_id)

        tampered = token[:-5] + "xxxxx"

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(tampered)

    def test_verify_wrong_secret_raises(self):
        """Test that token from different secret raises InvalidTokenError."""
        other_service = JWTService(secret_key="different-secret")
        token = other_service.create_token(user_id=self.user_id)

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_verify_non_uuid_subject_raises(self):
        """Test that a signed token with a bogus subject is rejected."""
        token = jwt.encode(
            {
                "sub": "not-a-uuid",
                "exp": datetime.now(tz=timezone.utc) + timedelta(hours=1),
            },
            "test-secret-key-12345",
            algorithm=JWTService.ALGORITHM,
        )

        with pytest.raises(InvalidTokenError, match="Malformed"):
            self.service.verify_token(token)

    def test_verify_missing_subject_raises(self):
        """Test that a signed token without subject is rejected."""
        token = jwt.encode(
            {"exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)},
            "test-secret-key-12345",
            algorithm=JWTService.ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)
