"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env.<env> or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All sensitive values (database URL, JWT secret, gas payer key) should
    come from environment variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Splyt"
    APP_VERSION: str = "1.0.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Database (from environment - REQUIRED in production)
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)

    # JWT Authentication (from environment - REQUIRED in production)
    JWT_SECRET_KEY: str = Field(..., description="JWT secret key")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_HOURS: int = Field(
        default=876000,
        ge=1,
        description="Token lifetime (default: 100 years)",
    )

    # Blockchain / SplitFactory
    BLOCKCHAIN_ENABLED: bool = Field(
        default=False,
        description="Register splits on chain (False = placeholder registry)",
    )
    BLOCKCHAIN_RPC_URL: Optional[str] = Field(default=None)
    SPLIT_FACTORY_CONTRACT_ADDRESS: Optional[str] = Field(default=None)
    GAS_PAYER_ADDRESS: Optional[str] = Field(default=None)
    GAS_PAYER_KEY: Optional[str] = Field(
        default=None,
        description="Private key paying gas for createSplit",
    )
    BLOCKCHAIN_CONFIRMATIONS_REQUIRED: int = Field(default=12, ge=0)
    BLOCKCHAIN_RECEIPT_TIMEOUT: float = Field(
        default=120.0,
        gt=0,
        description="Seconds to wait for a transaction receipt",
    )
    BLOCKCHAIN_SPLIT_EXPIRY_DAYS: int = Field(default=30, ge=1)

    # Splits
    SPLIT_STRICT_AMOUNT_CHECK: bool = Field(
        default=False,
        description="Reject (True) or only log (False) amount mismatches on save",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: Optional[str] = Field(default=None)

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics at /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("SPLIT_FACTORY_CONTRACT_ADDRESS", "GAS_PAYER_ADDRESS")
    @classmethod
    def validate_contract_address(cls, v: Optional[str]) -> Optional[str]:
        """Validate optional EVM addresses."""
        if v is None or v == "":
            return None
        v = v.strip()
        if not (v.startswith("0x") and len(v) == 42):
            raise ValueError(f"Invalid EVM address: {v}")
        return v


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # init kwargs outrank env vars in pydantic-settings
    merged_config = {k: v for k, v in merged_config.items() if k not in os.environ}

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
