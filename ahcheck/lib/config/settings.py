"""Settings models and configuration loading for the absolute humidity checker."""

from functools import cached_property, lru_cache
from typing import Annotated, Any, Self

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from ahcheck.lib.config.constants import OPEN_METEO_URL


def _parse_bool(v: Any) -> bool:
    """Parse boolean from string '1'/'0' or actual bool."""
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v == "1"
    return bool(v)


def _validate_http_url(v: str) -> str:
    """Validate HTTP URL format."""
    HttpUrl(v)
    return v


_BoolFromStr = Annotated[bool, BeforeValidator(_parse_bool)]
_HttpUrlStr = Annotated[str, AfterValidator(_validate_http_url)]


class WeatherSettings(BaseModel):
    """Weather API client settings."""

    model_config = ConfigDict(frozen=True)

    api_url: str = OPEN_METEO_URL
    timeout_sec: float = 10.0
    max_retries: int = 2
    initial_backoff_sec: float = 1.0
    mock: bool = False


class LocationSettings(BaseModel):
    """Device location settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    latitude: float | None = None
    longitude: float | None = None

    @property
    def is_configured(self) -> bool:
        """Whether fixed coordinates are available."""
        return self.latitude is not None and self.longitude is not None


class PanelSettings(BaseModel):
    """Initial inputs of the humidity panel."""

    model_config = ConfigDict(frozen=True)

    default_temperature: float = 22.0
    default_humidity: float = 50.0


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Panel defaults
    default_temperature: float = 22.0
    default_humidity: float = Field(default=50.0, ge=0, le=100)

    # Location
    location_enabled: _BoolFromStr = True
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    # Weather API
    weather_api_url: _HttpUrlStr = OPEN_METEO_URL
    weather_timeout_sec: float = Field(default=10.0, gt=0)
    weather_max_retries: int = Field(default=2, ge=1)
    weather_initial_backoff_sec: float = Field(default=1.0, ge=0)
    mock_weather: _BoolFromStr = False

    # Logging
    log_level: str = "INFO"

    @cached_property
    def panel(self) -> PanelSettings:
        """Get panel settings as nested object."""
        return PanelSettings(
            default_temperature=self.default_temperature,
            default_humidity=self.default_humidity,
        )

    @cached_property
    def location(self) -> LocationSettings:
        """Get location settings as nested object."""
        return LocationSettings(
            enabled=self.location_enabled,
            latitude=self.latitude,
            longitude=self.longitude,
        )

    @cached_property
    def weather(self) -> WeatherSettings:
        """Get weather client settings as nested object."""
        return WeatherSettings(
            api_url=self.weather_api_url,
            timeout_sec=self.weather_timeout_sec,
            max_retries=self.weather_max_retries,
            initial_backoff_sec=self.weather_initial_backoff_sec,
            mock=self.mock_weather,
        )

    @model_validator(mode="after")
    def validate_settings(self) -> Self:
        """Validate cross-field configuration constraints."""
        errors: list[str] = []

        if (self.latitude is None) != (self.longitude is None):
            errors.append(
                "LATITUDE and LONGITUDE must be set together "
                f"(got LATITUDE={self.latitude}, LONGITUDE={self.longitude})"
            )

        if self.log_level.upper() not in (
            "DEBUG",
            "INFO",
            "WARNING",
            "ERROR",
            "CRITICAL",
        ):
            errors.append(f"LOG_LEVEL ({self.log_level}) is not a valid level")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n  - "
                + "\n  - ".join(errors)
            )

        return self


# Settings override for testing - allows injecting custom Settings without
# modifying environment variables or clearing the lru_cache.
_settings_override: Settings | None = None


@lru_cache(maxsize=1)
def _load_settings() -> Settings:
    """Load settings from environment (cached)."""
    return Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns the test override if set, otherwise loads from environment
    variables (cached after first load). For testing, use set_settings()
    from ahcheck.lib.config.testing to override.
    """
    if _settings_override is not None:
        return _settings_override
    return _load_settings()
