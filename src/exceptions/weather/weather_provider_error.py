from src.exceptions.weather.weather_service_error import WeatherServiceError


class WeatherProviderError(WeatherServiceError):
    """Exception for failed weather provider requests other than unknown cities."""

    pass
