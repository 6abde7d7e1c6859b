"""Application configuration from environment variables."""

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_SECRET_KEY = "change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow unrelated keys in .env
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./homeledger.db",
        description="SQLAlchemy connection string",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Auth
    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY, description="HMAC key used to sign access tokens"
    )
    token_ttl_seconds: int = Field(
        default=7 * 24 * 3600, description="Lifetime of an access token in seconds"
    )
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor for new hashes")
    registration_enabled: bool = Field(
        default=False, description="Allow self-service sign up via /api/auth/register"
    )

    # HTTP
    frontend_url: str = Field(
        default="http://localhost:3333", description="Allowed CORS origin"
    )
    rate_limit_enabled: bool = Field(
        default=True, description="Throttle requests per client address"
    )
    api_rate_limit: str = Field(
        default="100 per 15 minutes", description="Default request limit for every API route"
    )
    login_rate_limit: str = Field(
        default="5 per 15 minutes", description="Login attempts allowed per client address"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Server log file")

    # Presentation
    locale: str = Field(default="en_AE", description="Locale for text report export")

    # API
    api_title: str = Field(default="HomeLedger API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")


# Global settings instance
settings = Settings()

__all__ = ["Settings", "settings", "DEFAULT_SECRET_KEY"]
