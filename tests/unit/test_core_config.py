"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Settings loading from environment variables
- Environment detection
- Validation (currency, commit attempts, URLs)
- Default values
- Cached singleton behavior
"""

import os
from decimal import Decimal
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import Settings, get_settings
from src.core.enums import Environment


@pytest.fixture
def base_test_env():
    """Base environment dict for config tests."""
    return {
        "PAYONEER_CLIENT_ID": "client-id",
        "PAYONEER_CLIENT_SECRET": "client-secret",
        "PAYONEER_REDIRECT_URI": "http://localhost:4000/oauth/authorize",
    }


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.port == 4000
        assert settings.payoneer_api_url == "https://api.sandbox.payoneer.com"
        assert settings.payoneer_oauth_path == "/api/v2/oauth2"
        assert settings.payoneer_charge_amount == Decimal("6.12")
        assert settings.payoneer_charge_currency == "USD"
        assert settings.payoneer_target_amount is True
        assert settings.commit_timeout_seconds == 30.0
        assert settings.commit_backoff_seconds == 3.0
        assert settings.commit_max_attempts == 2

    def test_credentials_have_no_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.payoneer_client_id is None
        assert settings.payoneer_client_secret is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings field validation."""

    def test_url_trailing_slash_removed(self, base_test_env):
        env_values = base_test_env | {
            "PAYONEER_API_URL": "https://api.payoneer.com/",
            "PAYONEER_LOGIN_URL": "https://login.payoneer.com/",
        }
        with patch.dict(os.environ, env_values, clear=True):
            settings = Settings(_env_file=None)

        assert settings.payoneer_api_url == "https://api.payoneer.com"
        assert settings.payoneer_login_url == "https://login.payoneer.com"

    def test_currency_normalized(self, base_test_env):
        env_values = base_test_env | {"PAYONEER_CHARGE_CURRENCY": " eur "}
        with patch.dict(os.environ, env_values, clear=True):
            settings = Settings(_env_file=None)

        assert settings.payoneer_charge_currency == "EUR"

    def test_currency_invalid(self, base_test_env):
        env_values = base_test_env | {"PAYONEER_CHARGE_CURRENCY": "DOLLARS"}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

        assert any(
            "3-letter code" in str(error) for error in exc_info.value.errors()
        )

    @pytest.mark.parametrize("attempts", ["0", "6"])
    def test_commit_max_attempts_out_of_range(self, base_test_env, attempts):
        env_values = base_test_env | {"COMMIT_MAX_ATTEMPTS": attempts}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings(_env_file=None)

        assert any(
            "commit_max_attempts must be between 1 and 5" in str(error)
            for error in exc_info.value.errors()
        )


@pytest.mark.unit
class TestEnvironmentDetection:
    """Test environment helper properties."""

    @pytest.mark.parametrize(
        ("value", "development", "testing", "production"),
        [
            ("development", True, False, False),
            ("testing", False, True, False),
            ("production", False, False, True),
            ("ci", False, False, False),
        ],
    )
    def test_properties(self, value, development, testing, production):
        with patch.dict(os.environ, {"ENVIRONMENT": value}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.is_development is development
        assert settings.is_testing is testing
        assert settings.is_production is production


@pytest.mark.unit
def test_get_settings_is_cached(base_test_env):
    with patch.dict(os.environ, base_test_env, clear=True):
        get_settings.cache_clear()
        first = get_settings()
        second = get_settings()

    assert first is second
    get_settings.cache_clear()
