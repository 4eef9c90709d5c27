"""Tests for shared/config.py."""

from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Mentor GPT API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.email_verification_threshold == 12
        assert settings.resend_cooldown_seconds == 120
        assert settings.code_expiration_minutes == 10
        assert settings.default_model_id == "llama-3.1-8b-instant"
        assert settings.storage_backend == "supabase"

    def test_loads_from_env(self):
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_integration_keys(self):
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_JWT_SECRET": "jwt-secret",
            "RESEND_API_KEY": "re_test",
            "RESEND_FROM_EMAIL": "noreply@example.com",
            "GROQ_API_KEY": "gsk_test",
        }):
            settings = Settings()
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_jwt_secret == "jwt-secret"
            assert settings.resend_api_key == "re_test"
            assert settings.resend_from_email == "noreply@example.com"
            assert settings.groq_api_key == "gsk_test"

    def test_supabase_settings_are_service_role_only(self):
        supabase_fields = {name for name in Settings.model_fields if name.startswith("supabase_")}
        assert supabase_fields == {
            "supabase_url",
            "supabase_service_role_key",
            "supabase_jwt_secret",
            "supabase_db_url",
        }

    def test_metering_overrides(self):
        with patch.dict(os.environ, {
            "EMAIL_VERIFICATION_THRESHOLD": "5",
            "RESEND_COOLDOWN_SECONDS": "30",
        }):
            settings = Settings()
            assert settings.email_verification_threshold == 5
            assert settings.resend_cooldown_seconds == 30


class TestGetSettings:
    def test_returns_settings_instance(self):
        get_settings.cache_clear()
        assert isinstance(get_settings(), Settings)

    def test_caches(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
