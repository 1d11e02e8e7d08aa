"""Configuration management using environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="HTTP server port", ge=1, le=65535)
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (e.g., 'https://app.example.com')",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    environment: str = Field(default="development", description="Environment name")

    # Request context
    request_id_header: str = Field(
        default="X-Request-ID", description="Header carrying the inbound request id"
    )
    trust_request_id_header: bool = Field(
        default=True,
        description="Reuse the inbound request id header instead of always generating one",
    )

    # Authentication
    use_auth: bool = Field(
        default=True, description="Enable/disable bearer token middleware for local development"
    )
    jwt_secret: SecretStr | None = Field(None, description="Shared secret used to verify JWTs")
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256", description="Signing algorithm accepted for bearer tokens"
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Returns the parsed list of CORS origins."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config()
