from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings.

    This class loads configuration values from environment variables
    and optionally from a `.env` file. It uses Pydantic Settings
    to provide type validation and default values.

    Environment variables take precedence over `.env` values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------
    # Application settings
    # ---------------------------------------------------------------------

    app_name: str = Field(
        default="weather-forecast-api",
        alias="APP_NAME",
        description="Application name displayed in logs and API documentation",
    )

    environment: str = Field(
        default="local",
        alias="ENVIRONMENT",
        description="Runtime environment (local, dev, prod)",
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # ---------------------------------------------------------------------
    # OpenWeatherMap provider
    # ---------------------------------------------------------------------

    owm_api_key: Optional[str] = Field(
        default=None,
        alias="OWM_API_KEY",
        description="API key used to authenticate requests to OpenWeatherMap",
    )

    owm_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5",
        alias="OWM_BASE_URL",
        description="Base URL for current weather and forecast endpoints",
    )

    owm_geo_url: str = Field(
        default="https://api.openweathermap.org/geo/1.0",
        alias="OWM_GEO_URL",
        description="Base URL for the geocoding endpoint",
    )

    upstream_timeout_s: float = Field(
        default=10.0,
        alias="UPSTREAM_TIMEOUT_S",
        gt=0,
        description="Timeout in seconds applied to every provider request",
    )

    # ---------------------------------------------------------------------
    # Forecast shaping
    # ---------------------------------------------------------------------

    geocoding_limit: int = Field(
        default=5,
        alias="GEOCODING_LIMIT",
        ge=1,
        description="Maximum number of location suggestions requested from the provider",
    )

    forecast_max_days: int = Field(
        default=7,
        alias="FORECAST_MAX_DAYS",
        ge=1,
        le=7,
        description="Maximum number of daily summaries returned",
    )

    group_forecast_by_date: bool = Field(
        default=False,
        alias="GROUP_FORECAST_BY_DATE",
        description="Group forecast points by local ISO date instead of weekday name",
    )


# Singleton settings instance
settings = Settings()
