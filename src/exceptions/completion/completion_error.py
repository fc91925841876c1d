from src.exceptions.base import WeatherAssistantError


class CompletionError(WeatherAssistantError):
    """Exception raised when the completion provider rejects or fails a request."""

    pass
