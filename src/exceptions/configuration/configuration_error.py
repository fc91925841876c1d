from src.exceptions.base import WeatherAssistantError


class ConfigurationError(WeatherAssistantError):
    """Exception raised when a required provider credential is missing."""

    pass
