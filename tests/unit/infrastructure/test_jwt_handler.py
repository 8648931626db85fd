"""
Unit tests for JWT handler.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from jose import jwt

from splyt.domain.exceptions import ExpiredTokenError, InvalidTokenError
from splyt.infrastructure.auth.jwt_handler import (
    create_access_token,
    decode_access_token,
)
from tests.helpers.factories import PAYER_A


class TestJwtHandler:
    """Unit tests for token creation and validation."""

    def test_round_trip(self):
        user_id = uuid4()

        token = create_access_token(user_id, PAYER_A, "Swift Otter AAAA")
        payload = decode_access_token(token)

        assert payload == {
            "user_id": str(user_id),
            "wallet_address": PAYER_A,
            "display_name": "Swift Otter AAAA",
        }

    def test_claims_carry_camel_case_identity(self):
        user_id = uuid4()
        token = create_access_token(user_id, PAYER_A, "Swift Otter AAAA")

        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == str(user_id)
        assert claims["userId"] == str(user_id)
        assert claims["walletAddress"] == PAYER_A
        assert claims["type"] == "access"

    def test_default_lifetime_is_effectively_unbounded(self, settings):
        """Test default expiry lies decades ahead."""
        token = create_access_token(uuid4(), PAYER_A, "Swift Otter AAAA")

        exp = jwt.get_unverified_claims(token)["exp"]
        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)

        assert settings.JWT_EXPIRATION_HOURS == 876000
        assert expires_at - datetime.now(timezone.utc) > timedelta(days=365 * 99)

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"userId": str(uuid4()), "walletAddress": PAYER_A},
            "some-other-secret",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_expired_token_rejected(self, settings):
        token = jwt.encode(
            {
                "userId": str(uuid4()),
                "walletAddress": PAYER_A,
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.JWT_SECRET_KEY,
            algorithm="HS256",
        )

        with pytest.raises(ExpiredTokenError):
            decode_access_token(token)

    def test_token_without_wallet_rejected(self, settings):
        token = jwt.encode(
            {"userId": str(uuid4())}, settings.JWT_SECRET_KEY, algorithm="HS256"
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_garbage_token_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.token")
