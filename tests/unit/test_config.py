"""Tests for configuration loading and credential validation."""

import pytest

from tasklist.core.config import Constants, Settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("STORAGE_PATH", "WEATHER_API_KEY", "WEATHER_BASE_URL", "WEATHER_UNITS", "DEFAULT_CITY"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.storage_path == "data/tasklist.db"
        assert settings.weather_api_key is None
        assert settings.weather_base_url == "https://api.openweathermap.org/data/2.5"
        assert settings.weather_units == "metric"
        assert settings.default_city is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WEATHER_API_KEY", "env-key")
        monkeypatch.setenv("default_city", "Lisbon")

        settings = Settings(_env_file=None)

        assert settings.weather_api_key == "env-key"
        assert settings.default_city == "Lisbon"

    def test_require_credential_returns_value(self):
        settings = Settings(_env_file=None, weather_api_key="abc")

        assert settings.require_credential("weather_api_key", "Weather API") == "abc"

    def test_require_credential_missing(self, monkeypatch):
        monkeypatch.delenv("WEATHER_API_KEY", raising=False)
        settings = Settings(_env_file=None)

        with pytest.raises(ValueError, match="Weather API credential not configured") as exc_info:
            settings.require_credential("weather_api_key", "Weather API")

        assert "WEATHER_API_KEY" in str(exc_info.value)


@pytest.mark.unit
def test_storage_keys():
    assert Constants.STORAGE_KEY_TODOS == "todos"
    assert Constants.STORAGE_KEY_AUTH == "isAuthenticated"
    assert Constants.INVALID_CITY_MESSAGE == "Invalid city name!"


@pytest.mark.unit
def test_http_status_codes():
    assert Constants.HTTP_BAD_REQUEST == 400
    assert Constants.HTTP_NOT_FOUND == 404
    assert Constants.HTTP_UNPROCESSABLE_ENTITY == 422
    assert not hasattr(Constants, "PROJECT_ROOT")
