from src.exceptions.base import WeatherAssistantError


class WeatherServiceError(WeatherAssistantError):
    """Base exception for weather service errors."""

    pass
