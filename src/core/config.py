"""Application configuration using pydantic-settings."""
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")

    # Signs short-lived OAuth state tokens
    secret_key: str = Field(
        default="change-me-in-production", validation_alias="SECRET_KEY",
    )

    # GitHub OAuth app
    github_client_id: str = Field(default="", validation_alias="GITHUB_CLIENT_ID")
    github_client_secret: str = Field(default="", validation_alias="GITHUB_CLIENT_SECRET")
    github_redirect_uri: str = Field(
        default="http://localhost:8000/auth/github/callback",
        validation_alias="GITHUB_REDIRECT_URI",
    )

    # Development mode - bypasses auth for local development
    dev_mode: bool = Field(default=False, validation_alias="DEV_MODE")

    # Public site URL, used in downloaded files and contribution PR bodies
    site_url: str = Field(default="http://localhost:3000", validation_alias="SITE_URL")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Redis - for rate limiting
    redis_url: str = Field(default="redis://localhost:6379", validation_alias="REDIS_URL")
    redis_enabled: bool = Field(default=True, validation_alias="REDIS_ENABLED")
    redis_pool_size: int = Field(default=20, validation_alias="REDIS_POOL_SIZE")

    # Submission field limits
    max_title_length: int = Field(default=100, validation_alias="MAX_TITLE_LENGTH")
    max_description_length: int = Field(
        default=500, validation_alias="MAX_DESCRIPTION_LENGTH",
    )
    max_content_length: int = Field(default=10_000, validation_alias="MAX_CONTENT_LENGTH")
    max_tags: int = Field(default=10, validation_alias="MAX_TAGS")

    # GitHub PR-based contributions (disabled when repo or token is empty)
    contribution_repo: str = Field(default="", validation_alias="CONTRIBUTION_REPO")
    contribution_token: str = Field(default="", validation_alias="CONTRIBUTION_TOKEN")
    contribution_base_branch: str = Field(
        default="main", validation_alias="CONTRIBUTION_BASE_BRANCH",
    )

    @model_validator(mode="after")
    def validate_dev_mode_security(self) -> "Settings":
        """
        Prevent DEV_MODE from being enabled with a production database.

        DEV_MODE completely bypasses authentication, so it is only allowed with
        a local database (localhost or a SQLite file/in-memory database).
        """
        if not self.dev_mode:
            return self

        if self.database_url.startswith("sqlite"):
            return self

        try:
            parsed = urlparse(self.database_url)
            hostname = parsed.hostname or ""
        except ValueError:
            hostname = ""

        local_hosts = {"localhost", "127.0.0.1", "0.0.0.0", "::1"}
        if hostname.lower() not in local_hosts:
            raise ValueError(
                f"DEV_MODE cannot be enabled with a non-local database. "
                f"Database host '{hostname}' appears to be a production database. "
                f"DEV_MODE bypasses all authentication and must only be used locally.",
            )

        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def contributions_enabled(self) -> bool:
        """Whether GitHub PR contributions are configured."""
        return bool(self.contribution_repo and self.contribution_token)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
