"""
Unit tests for settings loading and validation.
"""

import pytest
from pydantic import ValidationError

from splyt.config.settings import Settings, load_config


class TestSettings:
    """Unit tests for Settings and load_config."""

    def test_load_test_config(self, monkeypatch):
        """Test YAML layering: default.yaml, then test.yaml."""
        for name in ("DATABASE_URL", "JWT_SECRET_KEY", "LOG_LEVEL", "ENV"):
            monkeypatch.delenv(name, raising=False)

        settings = load_config(env="test")

        assert settings.ENV == "test"
        assert settings.DATABASE_URL.startswith("sqlite+aiosqlite")
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.APP_NAME == "Splyt"
        assert settings.BLOCKCHAIN_CONFIRMATIONS_REQUIRED == 12

    def test_environment_beats_yaml(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        settings = load_config(env="test")

        assert settings.LOG_LEVEL == "ERROR"

    def test_defaults(self):
        settings = Settings(DATABASE_URL="sqlite+aiosqlite://", JWT_SECRET_KEY="k")

        assert settings.JWT_EXPIRATION_HOURS == 876000
        assert settings.BLOCKCHAIN_ENABLED is False
        assert settings.SPLIT_STRICT_AMOUNT_CHECK is False

    def test_log_level_normalized(self):
        settings = Settings(
            DATABASE_URL="sqlite+aiosqlite://", JWT_SECRET_KEY="k", LOG_LEVEL="debug"
        )

        assert settings.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(
                DATABASE_URL="sqlite+aiosqlite://",
                JWT_SECRET_KEY="k",
                LOG_LEVEL="LOUD",
            )

    def test_invalid_contract_address(self):
        with pytest.raises(ValidationError):
            Settings(
                DATABASE_URL="sqlite+aiosqlite://",
                JWT_SECRET_KEY="k",
                SPLIT_FACTORY_CONTRACT_ADDRESS="0x1234",
            )

    def test_blank_contract_address_is_unset(self):
        settings = Settings(
            DATABASE_URL="sqlite+aiosqlite://",
            JWT_SECRET_KEY="k",
            SPLIT_FACTORY_CONTRACT_ADDRESS="",
        )

        assert settings.SPLIT_FACTORY_CONTRACT_ADDRESS is None
