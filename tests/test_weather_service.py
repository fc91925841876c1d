from unittest.mock import patch, AsyncMock

import httpx
import pytest

from src.exceptions import (
    CityNotFoundError,
    ConfigurationError,
    MalformedResponseError,
    WeatherProviderError,
)
from src.models.weather.weather import WeatherRecord
from src.services.weather_service import WeatherService


@pytest.fixture
def service(mock_config):
    WeatherService.reset_instance()
    with patch('src.services.weather_service.config', mock_config):
        service = WeatherService()
    yield service
    WeatherService.reset_instance()


class TestWeatherService:
    """Test cases for the WeatherService class."""

    @pytest.mark.asyncio
    async def test_make_request_success(self, service, mock_config, mock_async_client, openweather_payload):
        """Test successful API request."""
        mock_async_client.get.return_value = httpx.Response(200, json=openweather_payload)

        result = await service._make_request("London")

        assert result == openweather_payload
        mock_async_client.get.assert_called_once()
        call_args = mock_async_client.get.call_args
        assert call_args[0][0] == mock_config.openweather_base_url
        assert call_args[1]["params"]["q"] == "London"
        assert call_args[1]["params"]["appid"] == mock_config.openweather_api_key
        assert call_args[1]["params"]["units"] == "metric"

    @pytest.mark.asyncio
    async def test_city_is_url_encoded(self, service, mock_config, openweather_payload):
        """Test that city names with reserved characters are encoded in the query string."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json=openweather_payload)

        real_client = httpx.AsyncClient
        with patch('httpx.AsyncClient', lambda: real_client(transport=httpx.MockTransport(handler))):
            await service._make_request("São Paulo & Co")

        assert len(seen) == 1
        assert seen[0].params["q"] == "São Paulo & Co"
        assert b"S%C3%A3o" in seen[0].query
        assert b"%26" in seen[0].query

    @pytest.mark.asyncio
    async def test_make_request_city_not_found(self, service, mock_async_client):
        """Test API request with 404 response."""
        mock_async_client.get.return_value = httpx.Response(404, json={"cod": "404", "message": "city not found"})

        with pytest.raises(CityNotFoundError, match='City "Atlantis" not found.'):
            await service._make_request("Atlantis")

    @pytest.mark.asyncio
    async def test_make_request_provider_error_uses_status_line(self, service, mock_async_client):
        """Test API request with a non-404 failure."""
        mock_async_client.get.return_value = httpx.Response(401, json={"cod": 401, "message": "Invalid API key"})

        with pytest.raises(WeatherProviderError, match="Error fetching weather: Unauthorized"):
            await service._make_request("London")

    @pytest.mark.asyncio
    async def test_make_request_is_not_retried(self, service, mock_async_client):
        """Test that a failing request is issued exactly once."""
        mock_async_client.get.return_value = httpx.Response(503)

        with pytest.raises(WeatherProviderError):
            await service._make_request("London")

        assert mock_async_client.get.call_count == 1

    @pytest.mark.asyncio
    async def test_make_request_connection_error(self, service, mock_async_client):
        """Test that connectivity loss is reported as a provider error."""
        mock_async_client.get.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(WeatherProviderError, match="Connection refused"):
            await service._make_request("London")

    @pytest.mark.asyncio
    async def test_make_request_invalid_json(self, service, mock_async_client):
        """Test a successful status with a body that is not JSON."""
        mock_async_client.get.return_value = httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(MalformedResponseError, match="not JSON"):
            await service._make_request("London")

    @pytest.mark.asyncio
    async def test_missing_api_key(self, mock_config, mock_async_client):
        """Test that a missing key fails before any request is made."""
        WeatherService.reset_instance()
        mock_config.openweather_api_key = None
        with patch('src.services.weather_service.config', mock_config):
            service = WeatherService()

        with pytest.raises(ConfigurationError, match="OpenWeatherMap API key is not configured"):
            await service.get_current_weather("London")

        mock_async_client.get.assert_not_called()
        WeatherService.reset_instance()

    @pytest.mark.asyncio
    async def test_get_current_weather_success(self, service, openweather_payload):
        """Test successful current weather fetch."""
        with patch.object(service, '_make_request', new_callable=AsyncMock) as mock_make_request:
            mock_make_request.return_value = openweather_payload

            result = await service.get_current_weather("london")

            assert isinstance(result, WeatherRecord)
            assert result.city_name == "London"
            assert result.temperature == 15
            assert result.description == "clear sky"
            assert result.humidity == 60
            assert result.wind_speed == 3.1

            mock_make_request.assert_called_once_with("london")

    @pytest.mark.asyncio
    async def test_get_current_weather_validation_error(self, service):
        """Test current weather fetch with invalid API response."""
        with patch.object(service, '_make_request', new_callable=AsyncMock) as mock_make_request:
            mock_make_request.return_value = {"invalid": "data"}

            with pytest.raises(MalformedResponseError, match="Invalid weather data received"):
                await service.get_current_weather("London")

    @pytest.mark.asyncio
    async def test_get_current_weather_empty_conditions(self, service, openweather_payload):
        """Test that an empty weather list is rejected instead of indexed."""
        openweather_payload["weather"] = []

        with patch.object(service, '_make_request', new_callable=AsyncMock) as mock_make_request:
            mock_make_request.return_value = openweather_payload

            with pytest.raises(MalformedResponseError):
                await service.get_current_weather("London")

    @pytest.mark.asyncio
    async def test_get_current_weather_missing_wind(self, service, openweather_payload):
        """Test that a payload without wind data is malformed."""
        del openweather_payload["wind"]

        with patch.object(service, '_make_request', new_callable=AsyncMock) as mock_make_request:
            mock_make_request.return_value = openweather_payload

            with pytest.raises(MalformedResponseError):
                await service.get_current_weather("London")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "section, field, value",
        [
            ("wind", "deg", 240.5),
            ("wind", "gust", -1),
            ("main", "pressure", 1012.7),
            ("sys", "country", None),
            ("weather", "id", "clear"),
        ],
    )
    async def test_unread_fields_are_not_validated(self, service, openweather_payload, section, field, value):
        """Test that odd values in fields the assistant never reads do not fail the lookup."""
        target = openweather_payload[section]
        if isinstance(target, list):
            target = target[0]
        target[field] = value

        with patch.object(service, '_make_request', new_callable=AsyncMock) as mock_make_request:
            mock_make_request.return_value = openweather_payload

            result = await service.get_current_weather("London")

        assert result.city_name == "London"
        assert result.temperature == 15
        assert result.wind_speed == 3.1

    @pytest.mark.asyncio
    async def test_fractional_humidity_is_kept(self, service, openweather_payload):
        openweather_payload["main"]["humidity"] = 62.5

        with patch.object(service, '_make_request', new_callable=AsyncMock) as mock_make_request:
            mock_make_request.return_value = openweather_payload

            result = await service.get_current_weather("London")

        assert result.humidity == 62.5
