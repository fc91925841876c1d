from src.exceptions.weather.weather_service_error import WeatherServiceError


class CityNotFoundError(WeatherServiceError):
    """Exception for city names the weather provider does not know."""

    pass
