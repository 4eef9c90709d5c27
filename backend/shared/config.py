"""
Centralized configuration for the Mentor GPT backend.

All settings are loaded from environment variables with sensible defaults.
Integration-specific settings are namespaced (e.g., SUPABASE_*, RESEND_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Mentor GPT API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""  # Direct Postgres URI, used by run_migrations.py

    # Resend (verification emails)
    resend_api_key: str = ""
    resend_from_email: str = ""

    # LLM Provider API Keys
    openai_api_key: str = ""
    groq_api_key: str = ""
    default_model_id: str = "llama-3.1-8b-instant"

    # Metering
    email_verification_threshold: int = 12
    resend_cooldown_seconds: int = 120
    code_expiration_minutes: int = 10

    # Storage backend: "supabase" or "memory" (local development only)
    storage_backend: str = "supabase"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
