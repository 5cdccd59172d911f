"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Calculate project root: config.py is in showcase/, so go up one level
_CONFIG_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CONFIG_DIR.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / "showcase" / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Project Showcase", description="Application name")
    app_env: str = Field(default="development", description="Application environment")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Origins allowed by the CORS middleware",
        alias="CORS_ORIGINS",
    )

    # Database
    database_url: str = Field(
        default=f"sqlite:///{_PROJECT_ROOT / 'showcase.db'}",
        description="SQLAlchemy database connection URL",
        alias="DATABASE_URL",
    )

    # Media host (Cloudinary)
    cloudinary_cloud_name: str | None = Field(
        default=None,
        description="Cloudinary cloud name",
        alias="CLOUDINARY_CLOUD_NAME",
    )
    cloudinary_api_key: str | None = Field(
        default=None,
        description="Cloudinary API key",
        alias="CLOUDINARY_API_KEY",
    )
    cloudinary_api_secret: str | None = Field(
        default=None,
        description="Cloudinary API secret",
        alias="CLOUDINARY_API_SECRET",
    )
    media_host_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for media host requests",
        alias="MEDIA_HOST_TIMEOUT",
    )
    thumbnail_folder: str = Field(
        default="project-thumbnails",
        description="Media host folder holding project thumbnails",
        alias="THUMBNAIL_FOLDER",
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str:
        """Validate and normalize database URL."""
        if v is None or v == "":
            raise ValueError("DATABASE_URL is required")
        return v.strip()

    @field_validator("app_env", mode="before")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        """Normalize app environment to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("thumbnail_folder", mode="before")
    @classmethod
    def normalize_thumbnail_folder(cls, v: str) -> str:
        """Strip surrounding slashes from the thumbnail folder."""
        if isinstance(v, str):
            return v.strip().strip("/")
        return v


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings: Application settings instance

    Example:
        ```python
        from showcase.config import get_settings

        settings = get_settings()
        print(settings.database_url)
        ```
    """
    return Settings()


# Global settings instance
settings = get_settings()
