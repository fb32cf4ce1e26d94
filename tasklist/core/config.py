"""Configuration management for tasklist."""

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

    # Local storage mirror
    storage_path: str = Field(default="data/tasklist.db", description="SQLite file backing the local storage mirror")

    # Weather API Configuration (OpenWeatherMap compatible)
    weather_api_key: str | None = Field(default=None, description="API key for the weather service")
    weather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        description="Weather API base URL",
    )
    weather_units: str = Field(default="metric", description="Unit system requested from the weather API")

    # Auth collaborator defaults
    default_city: str | None = Field(default=None, description="City used for weather lookups until the user sets one")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 10

    # HTTP Status Codes
    HTTP_BAD_REQUEST: int = 400
    HTTP_UNAUTHORIZED: int = 401
    HTTP_NOT_FOUND: int = 404
    HTTP_UNPROCESSABLE_ENTITY: int = 422

    # Local storage keys (one serialized blob each)
    STORAGE_KEY_TODOS: str = "todos"
    STORAGE_KEY_AUTH: str = "isAuthenticated"

    # User-facing weather message; raw upstream errors are never shown
    INVALID_CITY_MESSAGE: str = "Invalid city name!"

    # Notices kept for the view before the oldest are dropped
    MAX_NOTICES: int = 50


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
