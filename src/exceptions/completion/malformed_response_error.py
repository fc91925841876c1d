from src.exceptions.base import WeatherAssistantError


class MalformedResponseError(WeatherAssistantError):
    """Exception raised when a provider payload does not have the expected shape."""

    pass
