"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables. Configuration is read once at startup and never reloaded.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables (optionally a .env file)
- Type validation via Pydantic
- Payoneer credentials have no defaults (must come from the environment)

Usage:
    from src.core.config import settings

    client_id = settings.payoneer_client_id

    if settings.is_development:
        # Dev-specific behavior
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.constants import (
    COMMIT_BACKOFF_DEFAULT,
    COMMIT_MAX_ATTEMPTS_DEFAULT,
    COMMIT_TIMEOUT_DEFAULT,
    PROVIDER_TIMEOUT_DEFAULT,
)
from src.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. `.env` file in the working directory
        3. Default values (only for non-sensitive config)

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Callback server bind host",
    )
    port: int = Field(
        default=4000,
        description="Callback server bind port",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="Payoneer Charges",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Payoneer OAuth client
    payoneer_client_id: str | None = Field(
        default=None,
        description="Payoneer OAuth client ID",
    )
    payoneer_client_secret: str | None = Field(
        default=None,
        description="Payoneer OAuth client secret",
    )
    payoneer_partner_id: str | None = Field(
        default=None,
        description="Partner (program) ID credited by debits",
    )
    payoneer_redirect_uri: str | None = Field(
        default=None,
        description="Registered redirect URL for the consent callback",
    )

    # Payoneer hosts (sandbox by default)
    payoneer_api_url: str = Field(
        default="https://api.sandbox.payoneer.com",
        description="Payoneer API host (production: https://api.payoneer.com)",
    )
    payoneer_login_url: str = Field(
        default="https://login.sandbox.payoneer.com",
        description="Payoneer login host (production: https://login.payoneer.com)",
    )
    payoneer_oauth_path: str = Field(
        default="/api/v2/oauth2",
        description="OAuth path on the login host",
    )
    payoneer_timeout: float = Field(
        default=PROVIDER_TIMEOUT_DEFAULT,
        description="Timeout in seconds for non-commit Payoneer calls",
    )

    # Sample charge parameters
    payoneer_charge_amount: Decimal = Field(
        default=Decimal("6.12"),
        description="Amount debited by the sample flow",
    )
    payoneer_charge_currency: str = Field(
        default="USD",
        description="Currency of the balance to debit",
    )
    payoneer_charge_description: str = Field(
        default="Sample Description",
        description="Debit description shown to the account holder (<200 chars)",
    )
    payoneer_target_amount: bool = Field(
        default=True,
        description="True: partner receives the exact amount; False: holder pays exactly the amount",
    )
    payoneer_refresh_on_connect: bool = Field(
        default=True,
        description="Refresh the bearer token right after the code exchange",
    )

    # Commit lifecycle
    commit_timeout_seconds: float = Field(
        default=COMMIT_TIMEOUT_DEFAULT,
        description="Timeout for a single commit attempt",
    )
    commit_backoff_seconds: float = Field(
        default=COMMIT_BACKOFF_DEFAULT,
        description="Wait before retrying when the charge is still in progress",
    )
    commit_max_attempts: int = Field(
        default=COMMIT_MAX_ATTEMPTS_DEFAULT,
        description="Commit attempts including the first",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "payoneer_api_url",
        "payoneer_login_url",
        "payoneer_oauth_path",
    )
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Remove trailing slashes from URLs.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator("payoneer_charge_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """
        Normalize the charge currency to an uppercase ISO 4217 code.

        Args:
            v: Currency code.

        Returns:
            str: Uppercase currency code.

        Raises:
            ValueError: If the code is not three letters.
        """
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError("payoneer_charge_currency must be a 3-letter code")
        return code

    @field_validator("commit_max_attempts")
    @classmethod
    def validate_commit_max_attempts(cls, v: int) -> int:
        """
        Validate commit attempts are within a sane range.

        Args:
            v: Number of attempts.

        Returns:
            int: Validated attempt count.

        Raises:
            ValueError: If attempts are not between 1 and 5.
        """
        if not 1 <= v <= 5:
            raise ValueError("commit_max_attempts must be between 1 and 5")
        return v

    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
