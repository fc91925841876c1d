from src.models.weather.weather import OpenWeatherMapResponse, WeatherRecord

__all__ = ["OpenWeatherMapResponse", "WeatherRecord"]
