"""
Configuration management for the catalog and identity API.
Uses Pydantic Settings for environment variable handling and validation.
"""

from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = Field(default="Catalog & Identity API")
    app_version: str = Field(default="1.0.0")
    app_env: str = Field(default="development")
    debug: bool = Field(default=True)
    log_level: str = Field(default="DEBUG")

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=True)

    # Database Configuration (components first, the URL validator reads them)
    database_host: str = Field(default="localhost")
    database_port: int = Field(default=5432)
    database_name: str = Field(default="webapi")
    database_user: str = Field(default="webapi")
    database_password: str = Field(default="webapi")
    database_url: str = Field(default="", validate_default=True)
    database_pool_size: int = Field(default=10)
    database_max_overflow: int = Field(default=20)
    database_pool_timeout: int = Field(default=30)
    database_pool_recycle: int = Field(default=3600)

    # Security & Authentication
    jwt_secret_key: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_access_token_expire_minutes: int = Field(default=60)
    auth_middleware_enabled: bool = Field(default=True)

    # Localization
    default_culture: str = Field(default="en")
    supported_cultures: str = Field(default="en,fr")

    # Pagination
    default_page_size: int = Field(default=10)
    max_page_size: int = Field(default=100)

    # CORS Settings
    cors_enabled: bool = Field(default=True)
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:8080")
    cors_methods: str = Field(default="GET,POST,PUT,DELETE,OPTIONS")
    cors_headers: str = Field(default="Content-Type,Authorization,Accept-Language")
    cors_credentials: bool = Field(default=True)

    # Audit & Compliance
    audit_logging_enabled: bool = Field(default=True)
    request_logging_enabled: bool = Field(default=True)

    @field_validator("database_url", mode="before")
    @classmethod
    def build_database_url(cls, v, info):
        """Build database URL from components if not provided."""
        if v:
            return v
        values = info.data
        return (
            f"postgresql://{values.get('database_user', 'webapi')}:{values.get('database_password', 'webapi')}"
            f"@{values.get('database_host', 'localhost')}:{values.get('database_port', 5432)}"
            f"/{values.get('database_name', 'webapi')}"
        )


# Global settings instance
settings = Settings()


def parse_comma_separated(value: str) -> List[str]:
    """Parse a comma-separated string into a list of strings."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


# Convenience methods for parsed CORS settings
def get_cors_origins() -> List[str]:
    """Get CORS origins as a list."""
    return parse_comma_separated(settings.cors_origins)


def get_cors_methods() -> List[str]:
    """Get CORS methods as a list."""
    return parse_comma_separated(settings.cors_methods)


def get_cors_headers() -> List[str]:
    """Get CORS headers as a list."""
    return parse_comma_separated(settings.cors_headers)


def get_supported_cultures() -> List[str]:
    """Get the cultures the localizer ships catalogs for."""
    return parse_comma_separated(settings.supported_cultures)
