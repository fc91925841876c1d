from pydantic import BaseModel, Field

from src.models.weather.weather import WeatherRecord


def _format_number(value: float) -> str:
    # Whole values drop the trailing ".0"; others keep full precision
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


class WeatherPanel(BaseModel):
    """Display-ready form of a WeatherRecord for the structured weather panel."""

    title: str = Field(..., description="Panel heading, e.g. 'London Weather Details'")
    temperature: str = Field(..., description="Temperature with unit, e.g. '15°C'")
    description: str = Field(..., description="Weather description")
    humidity: str = Field(..., description="Humidity with unit, e.g. '60%'")
    wind_speed: str = Field(..., description="Wind speed with unit, e.g. '3.1 m/s'")

    @classmethod
    def from_record(cls, record: WeatherRecord) -> "WeatherPanel":
        return cls(
            title=f"{record.city_name} Weather Details",
            temperature=f"{_format_number(record.temperature)}°C",
            description=record.description,
            humidity=f"{_format_number(record.humidity)}%",
            wind_speed=f"{_format_number(record.wind_speed)} m/s",
        )
