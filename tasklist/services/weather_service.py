"""Weather lookups for outdoor tasks using an OpenWeatherMap-compatible API."""

import logging

import httpx
from pydantic import ValidationError

from tasklist.core.config import constants, settings
from tasklist.core.errors import InvalidCityError, WeatherError, WeatherServiceError, classify_weather_error
from tasklist.core.logging import span
from tasklist.core.store import Store
from tasklist.domain.weather import WeatherReport


logger = logging.getLogger(__name__)


# HTTP status code constants for error handling
HTTP_CLIENT_ERROR_START = 400
HTTP_CLIENT_ERROR_END = 500


async def fetch_weather(
    *,
    city: str,
    api_key: str | None = None,
    base_url: str | None = None,
    units: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WeatherReport:
    """Fetch current weather for a city.

    Args:
        city: City name as entered by the user
        api_key: API key (defaults to settings)
        base_url: API base URL (defaults to settings)
        units: Unit system (defaults to settings)
        transport: Optional httpx transport, used by tests

    Returns:
        Parsed weather report

    Raises:
        InvalidCityError: If the service does not know the city
        WeatherServiceError: For credential, network or upstream failures
    """
    key = api_key or settings.weather_api_key
    if not key:
        msg = "Weather API credential not configured. Set WEATHER_API_KEY environment variable or add to .env file."
        raise WeatherServiceError(msg)

    url = f"{(base_url or settings.weather_base_url).rstrip('/')}/weather"
    params = {"q": city, "appid": key, "units": units or settings.weather_units}

    try:
        async with httpx.AsyncClient(timeout=constants.API_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.get(url, params=params)
    except httpx.HTTPError as e:
        msg = f"Weather request failed: {type(e).__name__}: {e}"
        raise WeatherServiceError(msg) from e

    if response.status_code in (constants.HTTP_NOT_FOUND, constants.HTTP_BAD_REQUEST):
        raise InvalidCityError(city)

    if response.status_code == constants.HTTP_UNAUTHORIZED:
        msg = "Weather API rejected the credential (401 unauthorized)"
        raise WeatherServiceError(msg)

    if HTTP_CLIENT_ERROR_START <= response.status_code < HTTP_CLIENT_ERROR_END:
        msg = f"Weather API client error {response.status_code}"
        raise WeatherServiceError(msg)

    if not response.is_success:
        msg = f"Weather API server error {response.status_code}"
        raise WeatherServiceError(msg)

    try:
        return WeatherReport.from_openweather(response.json())
    except (ValueError, KeyError, TypeError, ValidationError) as e:
        msg = f"Unexpected weather payload: {e}"
        raise WeatherServiceError(msg) from e


class WeatherService:
    """Requests weather into the store, dropping superseded responses.

    Every `request` takes a new generation number; a response is applied only
    while its generation is still the latest. `clear` also starts a new
    generation, so a request in flight when the outdoor task disappears
    cannot bring the weather back.
    """

    def __init__(
        self,
        *,
        store: Store,
        api_key: str | None = None,
        base_url: str | None = None,
        units: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._store = store
        self._api_key = api_key
        self._base_url = base_url
        self._units = units
        self._transport = transport
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def enabled(self) -> bool:
        """Whether an API key is configured; without one no request is sent."""
        return bool(self._api_key or settings.weather_api_key)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def request(self, city: str) -> WeatherReport | None:
        """Fetch weather for `city` and commit the result to the store.

        Returns:
            The report if it was applied, None if the request failed or was superseded
        """
        self._generation += 1
        generation = self._generation

        with span("weather_service.request"):
            logger.info("Fetching weather for city: %s", city)
            self._store.weather_requested()

            try:
                report = await fetch_weather(
                    city=city,
                    api_key=self._api_key,
                    base_url=self._base_url,
                    units=self._units,
                    transport=self._transport,
                )
            except WeatherError as e:
                if not self._is_current(generation):
                    logger.debug("Dropping superseded weather error for %s", city)
                    return None
                category, message = classify_weather_error(e)
                logger.warning("Weather lookup failed for %s: %s (%s)", city, category.value, e)
                self._store.weather_failed(message)
                return None

            if not self._is_current(generation):
                logger.debug("Dropping superseded weather response for %s", city)
                return None

            self._store.weather_loaded(report)
            return report

    def clear(self) -> None:
        """Reset the weather error and invalidate any request in flight."""
        self._generation += 1
        self._store.clear_weather_error()
