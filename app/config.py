"""
Application configuration using pydantic-settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "shashikala"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API Server
    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: List[str] = ["https://shashikala-foundation.netlify.app"]

    # Postgres
    database_url: str = ""

    # Redis (Celery broker)
    redis_url: str = "redis://localhost:6379/0"

    # Razorpay
    razorpay_key_id: str
    razorpay_key_secret: str
    razorpay_webhook_secret: str = ""
    payment_currency: str = "USD"
    gateway_timeout_seconds: float = 10.0

    # Session tokens
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Transactional email
    email_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    email_api_key: str = ""
    email_from: str = "no-reply@shashikala.org"

    # Links in verification / reset emails
    frontend_url: str = "https://shashikala-foundation.netlify.app"
    verification_token_ttl_hours: int = 24
    reset_token_ttl_minutes: int = 60

    # Reconciliation of pending payments
    reconcile_after_minutes: int = 15
    payment_expiry_hours: int = 24

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
