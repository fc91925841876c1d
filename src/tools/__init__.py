from src.tools.weather_tool import (
    WEATHER_TOOL,
    WEATHER_TOOL_NAME,
    WeatherToolArguments,
    parse_weather_tool_arguments,
)

__all__ = [
    "WEATHER_TOOL",
    "WEATHER_TOOL_NAME",
    "WeatherToolArguments",
    "parse_weather_tool_arguments",
]
