"""
Configuration management for Exquisite Corpse.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = Field(default="Exquisite Corpse", env="APP_NAME")
    debug: bool = Field(default=False, env="DEBUG")
    environment: str = Field(default="development", env="ENVIRONMENT")

    # API
    api_host: str = Field(default="0.0.0.0", env="API_HOST")
    api_port: int = Field(default=8000, env="API_PORT")
    api_workers: int = Field(default=1, env="API_WORKERS")
    cors_allow_origins: str = Field(
        default="*",
        env="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of allowed CORS origins ('*' = any).",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./exquisite_corpse.db", env="DATABASE_URL"
    )

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_format: str = Field(default="json", env="LOG_FORMAT")

    # Game
    hint_word_count: int = Field(
        default=3,
        env="HINT_WORD_COUNT",
        description="Number of trailing words of a line shown to the next writer.",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def cors_origins(self) -> List[str]:
        """Parsed list of CORS origins."""
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
