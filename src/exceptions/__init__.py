from src.exceptions.base import WeatherAssistantError
from src.exceptions.completion import CompletionError, MalformedResponseError
from src.exceptions.configuration import ConfigurationError
from src.exceptions.validation import QueryValidationError
from src.exceptions.weather import (
    CityNotFoundError,
    WeatherProviderError,
    WeatherServiceError,
)

__all__ = [
    "WeatherAssistantError",
    "CompletionError",
    "MalformedResponseError",
    "ConfigurationError",
    "QueryValidationError",
    "CityNotFoundError",
    "WeatherProviderError",
    "WeatherServiceError",
]
