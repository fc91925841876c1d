from typing import List

from pydantic import BaseModel, ConfigDict, Field


class WeatherCondition(BaseModel):
    """Weather condition details."""

    description: str = Field(..., description="Detailed weather description")


class MainWeatherData(BaseModel):
    """Main weather measurements."""

    temp: float = Field(..., description="Current temperature")
    humidity: float = Field(..., ge=0, le=100, description="Humidity percentage")


class WindData(BaseModel):
    """Wind information."""

    speed: float = Field(..., ge=0, description="Wind speed in m/s")


class OpenWeatherMapResponse(BaseModel):
    """
    Subset of the OpenWeatherMap current weather response consumed by the assistant.

    Only the fields read into a WeatherRecord are declared; everything else the
    provider sends is ignored without being validated.
    """

    weather: List[WeatherCondition] = Field(..., min_length=1, description="Weather conditions")
    main: MainWeatherData = Field(..., description="Main weather data")
    wind: WindData = Field(..., description="Wind information")
    name: str = Field(..., description="City name")


class WeatherRecord(BaseModel):
    """
    Normalized current weather for one city, as handed to the model and the UI.

    Serialized with camelCase aliases (windSpeed, cityName) when sent back to
    the completion provider as a tool result.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = Field(..., description="Temperature in Celsius")
    description: str = Field(..., description="Weather description")
    humidity: float = Field(..., ge=0, le=100, description="Humidity percentage")
    wind_speed: float = Field(..., alias="windSpeed", description="Wind speed in m/s")
    city_name: str = Field(..., alias="cityName", description="City name as resolved by the provider")

    @classmethod
    def from_openweather_response(cls, response: OpenWeatherMapResponse) -> "WeatherRecord":
        """
        Create a WeatherRecord from an OpenWeatherMap API response.

        Args:
            response: Validated OpenWeatherMap API response

        Returns:
            WeatherRecord: Normalized weather record
        """
        return cls(
            temperature=response.main.temp,
            description=response.weather[0].description,
            humidity=response.main.humidity,
            wind_speed=response.wind.speed,
            city_name=response.name,
        )

    def to_tool_content(self) -> str:
        """Serialize the record as the content of a tool result message."""
        return self.model_dump_json(by_alias=True)
