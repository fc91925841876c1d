from typing import Any, Dict

import httpx
import structlog
from pydantic import ValidationError

from src.config.config import config
from src.exceptions.completion import MalformedResponseError
from src.exceptions.configuration import ConfigurationError
from src.exceptions.weather import CityNotFoundError, WeatherProviderError
from src.models.weather.weather import OpenWeatherMapResponse, WeatherRecord
from src.utils.singleton import Singleton

logger = structlog.get_logger(__name__)


class WeatherService(Singleton):
    """
    Client for the OpenWeatherMap current weather endpoint.

    Each lookup is a single GET without retries; failures are mapped onto the
    weather exception hierarchy so the orchestrator can report them.
    """

    def __init__(self):
        """Initialize the weather service."""
        super().__init__()

        if hasattr(self, "_weather_initialized"):
            return

        self.base_url = config.openweather_base_url
        self.api_key = config.openweather_api_key
        self.units = config.openweather_units

        self._weather_initialized = True

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _make_request(self, city: str) -> Dict[str, Any]:
        """
        Make one HTTP request to the OpenWeatherMap API.

        Args:
            city: City name; httpx URL-encodes it as the q parameter

        Returns:
            JSON response from the API

        Raises:
            ConfigurationError: If no API key is configured
            CityNotFoundError: If the city is not found (404)
            WeatherProviderError: For other API or connectivity errors
            MalformedResponseError: If a successful response is not JSON
        """
        if not self.api_key:
            raise ConfigurationError("OpenWeatherMap API key is not configured. Please check your .env file.")

        params = {"q": city, "appid": self.api_key, "units": self.units}

        try:
            async with httpx.AsyncClient() as client:
                logger.info("Making weather API request", url=self.base_url, city=city)
                response = await client.get(self.base_url, params=params)

        except httpx.RequestError as e:
            logger.warning("Weather request error", city=city, error=str(e))
            raise WeatherProviderError(f"Error fetching weather: {str(e)}")

        if response.status_code == 404:
            raise CityNotFoundError(f'City "{city}" not found.')

        if not response.is_success:
            logger.warning(
                "Weather API request failed",
                city=city,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise WeatherProviderError(f"Error fetching weather: {response.reason_phrase}")

        try:
            return response.json()
        except ValueError as e:
            logger.error("Weather API returned invalid JSON", city=city, error=str(e))
            raise MalformedResponseError(f"Invalid weather data received for {city}: response is not JSON")

    async def get_current_weather(self, city: str) -> WeatherRecord:
        """
        Get current weather data for a city.

        Args:
            city: Name of the city

        Returns:
            WeatherRecord with current weather data

        Raises:
            ConfigurationError: If no API key is configured
            CityNotFoundError: If city is not found
            WeatherProviderError: For other API errors
            MalformedResponseError: If the payload lacks expected fields
        """
        logger.info("Fetching current weather", city=city)
        data = await self._make_request(city)

        try:
            response = OpenWeatherMapResponse.model_validate(data)
        except ValidationError as e:
            logger.error("Failed to parse weather data", city=city, error=str(e))
            raise MalformedResponseError(f"Invalid weather data received for {city}: {str(e)}")

        weather_record = WeatherRecord.from_openweather_response(response)

        logger.info(
            "Successfully fetched current weather",
            city=city,
            resolved_city=weather_record.city_name,
            temperature=weather_record.temperature,
        )
        return weather_record


weather_service = WeatherService()
