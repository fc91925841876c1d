from src.exceptions.weather.city_not_found_error import CityNotFoundError
from src.exceptions.weather.weather_provider_error import WeatherProviderError
from src.exceptions.weather.weather_service_error import WeatherServiceError

__all__ = ["CityNotFoundError", "WeatherProviderError", "WeatherServiceError"]
