"""
Unit tests for backend/settings.py
"""

import pytest
from pydantic import ValidationError

from backend.settings import Settings, get_settings


# Environment variables that CI might set which we need to clear for default tests
CI_ENV_VARS = [
    "ENVIRONMENT",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "JWT_SECRET",
    "JWT_ISSUER",
    "JWT_AUDIENCE",
    "API_KEYS",
    "COMPLETION_TIMEOUT_SECONDS",
    "DEFAULT_BODY_WEIGHT_KG",
    "CORS_ALLOWED_ORIGINS",
    "SENTRY_DSN",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear CI environment variables to test true defaults."""
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.mark.unit
class TestSettingsDefaults:
    """Test that Settings applies correct defaults."""

    def test_environment_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.environment == "development"

    def test_supabase_fields_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.supabase_url is None
        assert settings.supabase_service_role_key is None
        assert settings.supabase_anon_key is None

    def test_completion_defaults(self, clean_env):
        """Completion deadline and fallback body weight have defaults."""
        settings = Settings(_env_file=None)
        assert settings.completion_timeout_seconds == 10.0
        assert settings.default_body_weight_kg == 75.0

    def test_jwt_claims_unchecked_by_default(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.jwt_issuer is None
        assert settings.jwt_audience is None

    def test_sentry_dsn_default_to_none(self, clean_env):
        settings = Settings(_env_file=None)
        assert settings.sentry_dsn is None


@pytest.mark.unit
class TestSettingsValidation:
    """Test Settings field validation."""

    def test_valid_environments_accepted(self):
        for env in ["development", "staging", "production", "test"]:
            settings = Settings(environment=env, _env_file=None)
            assert settings.environment == env

    def test_environment_case_insensitive(self):
        settings = Settings(environment="PRODUCTION", _env_file=None)
        assert settings.environment == "production"

    def test_invalid_environment_raises_error(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(environment="invalid", _env_file=None)
        assert "Invalid environment" in str(exc_info.value)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(completion_timeout_seconds=0, _env_file=None)

    def test_body_weight_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(default_body_weight_kg=-1, _env_file=None)


@pytest.mark.unit
class TestSettingsProperties:
    """Test Settings computed properties."""

    def test_supabase_key_prefers_service_role(self, clean_env):
        settings = Settings(
            supabase_service_role_key="service-key",
            supabase_anon_key="anon-key",
            _env_file=None,
        )
        assert settings.supabase_key == "service-key"

    def test_supabase_key_falls_back_to_anon(self, clean_env):
        settings = Settings(supabase_anon_key="anon-key", _env_file=None)
        assert settings.supabase_key == "anon-key"

    def test_api_keys_list_strips_whitespace(self):
        settings = Settings(api_keys=" key1 , key2,, ", _env_file=None)
        assert settings.api_keys_list == ["key1", "key2"]

    def test_cors_origins_list(self):
        settings = Settings(
            cors_allowed_origins="https://app.example.com, http://localhost:3000",
            _env_file=None,
        )
        assert settings.cors_origins_list == [
            "https://app.example.com",
            "http://localhost:3000",
        ]

    def test_is_test_property(self):
        settings = Settings(environment="test", _env_file=None)
        assert settings.is_test is True
        assert settings.is_production is False


@pytest.mark.unit
class TestGetSettings:
    """Test get_settings() function."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


@pytest.mark.unit
class TestSettingsFromEnv:
    """Test loading settings from environment variables."""

    def test_settings_loads_from_env(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("COMPLETION_TIMEOUT_SECONDS", "2.5")

        settings = Settings(_env_file=None)

        assert settings.environment == "staging"
        assert settings.supabase_url == "https://test.supabase.co"
        assert settings.completion_timeout_seconds == 2.5
