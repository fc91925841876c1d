from src.exceptions.base import WeatherAssistantError


class QueryValidationError(WeatherAssistantError):
    """Exception raised when a user query is empty or whitespace only."""

    pass
