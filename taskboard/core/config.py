"""Configuration management for taskboard."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    environment: str = Field(default="development", description="Deployment environment name")
    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to")  # noqa: S104
    port: int = Field(default=3001, description="Port the HTTP server listens on")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    frontend_url: str | None = Field(default=None, description="Extra frontend origin added to the CORS allow-list")

    # Store Configuration
    seed_sample_tasks: bool = Field(default=True, description="Populate the store with demonstration tasks on startup")

    # Notification Configuration
    notification_queue_maxsize: int = Field(
        default=1000, description="Maximum number of task events buffered for WebSocket delivery"
    )

    @property
    def is_production(self) -> bool:
        """Whether the app runs in the production environment."""
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        """CORS origins including the optional frontend URL."""
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins


# Application Constants
class Constants:
    """Application-wide constants."""

    # Pagination Defaults
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    # Task Field Limits
    TITLE_MAX_LENGTH: int = 100
    DESCRIPTION_MAX_LENGTH: int = 500
    MAX_TAGS: int = 10
    SEARCH_MAX_LENGTH: int = 100
    TAGS_FILTER_MAX_LENGTH: int = 200

    # Bulk Operations
    BULK_MAX_IDS: int = 100

    # Export
    EXPORT_MAX_TASKS: int = 10_000
    EXPORT_TAG_SEPARATOR: str = ";"


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
