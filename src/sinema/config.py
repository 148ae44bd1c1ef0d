"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # REST backend
    api_base_url: str = "http://localhost:8080/api/v1"
    request_timeout: int = 30

    # Query cache
    query_stale_seconds: int = 60
    query_gc_seconds: int = 300
    query_retry: int = 1

    # Session cookie signing (notifications)
    secret_key: str = "change-me-in-production"

    # Server settings
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    # Dates are shown and entered in this timezone
    display_timezone: str = "Europe/Paris"


# Global settings instance
settings = Settings()
