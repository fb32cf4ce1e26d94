"""Weather domain models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WeatherReport(BaseModel):
    """Current weather for a city."""

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., description="City name as resolved by the weather service")
    description: str = Field(default="", description="Short human-readable conditions")
    temperature: float = Field(..., description="Current temperature in the configured unit system")
    feels_like: float | None = Field(default=None, description="Apparent temperature")
    humidity: int | None = Field(default=None, description="Relative humidity in percent")
    wind_speed: float | None = Field(default=None, description="Wind speed in the configured unit system")
    icon: str | None = Field(default=None, description="Weather service icon code")

    @classmethod
    def from_openweather(cls, payload: dict[str, Any]) -> "WeatherReport":
        """Build a report from an OpenWeatherMap `/weather` response body."""
        main = payload.get("main") or {}
        conditions = payload.get("weather") or [{}]
        wind = payload.get("wind") or {}
        return cls(
            city=payload.get("name", ""),
            description=conditions[0].get("description", ""),
            temperature=main["temp"],
            feels_like=main.get("feels_like"),
            humidity=main.get("humidity"),
            wind_speed=wind.get("speed"),
            icon=conditions[0].get("icon"),
        )


class WeatherState(BaseModel):
    """Weather slice of the application state."""

    model_config = ConfigDict(frozen=True)

    data: WeatherReport | None = None
    error: str | None = None
    loading: bool = False
