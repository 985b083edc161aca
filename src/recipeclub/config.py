"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Ingredient combination service (optional; empty URL disables it)
    combine_service_url: str = ""
    combine_service_api_key: str = ""
    combine_service_timeout: float | None = None  # None waits indefinitely
    smart_combine_deadline: float = 20.0  # seconds the API waits before falling back
    user_agent: str = "RecipeClub/1.0"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def combine_service_enabled(self) -> bool:
        """Check if the combination service is configured."""
        return bool(self.combine_service_url)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
