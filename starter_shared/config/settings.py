"""
Application settings loaded from environment variables.
Uses pydantic-settings for type-safe configuration.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with defaults for development."""

    # Database
    database_url: str = "sqlite:///./crud_starter.db"

    # HTTP surface
    api_prefix: str = "/api"
    rest_api_port: int = 8000

    # Messages rendered for error responses
    default_locale: str = "en"

    # Password hashing cost (bcrypt accepts 4..31)
    bcrypt_rounds: int = 12

    # Drop created_by / modified_by / owner ids that match no user row
    validate_references: bool = False

    # Create missing tables when the app starts (no migrations in this project)
    create_tables_on_startup: bool = True

    # Environment
    environment: str = "development"
    debug: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

DATABASE_URL = settings.database_url
