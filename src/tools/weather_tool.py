import json

from pydantic import BaseModel, Field, ValidationError

from src.exceptions.completion import MalformedResponseError
from src.models.completion.completion import FunctionDefinition, ToolDefinition

WEATHER_TOOL_NAME = "get_current_weather"

WEATHER_TOOL = ToolDefinition(
    function=FunctionDefinition(
        name=WEATHER_TOOL_NAME,
        description=(
            "Get the current weather for a specific city. Returns temperature in Celsius, "
            "description, humidity, and wind speed."
        ),
        parameters={
            "type": "object",
            "properties": {
                "city": {
                    "type": "string",
                    "description": "The city name, e.g., 'London', 'New York'",
                },
            },
            "required": ["city"],
        },
    )
)


class WeatherToolArguments(BaseModel):
    """Arguments of a get_current_weather call."""

    city: str = Field(..., min_length=1, description="City to look up")


def parse_weather_tool_arguments(raw_arguments: str) -> WeatherToolArguments:
    """
    Parse the JSON argument string of a get_current_weather tool call.

    Args:
        raw_arguments: JSON-encoded arguments as emitted by the model

    Returns:
        WeatherToolArguments with a non-empty, trimmed city

    Raises:
        MalformedResponseError: If the arguments are not JSON or lack a city
    """
    try:
        arguments = json.loads(raw_arguments)
    except (TypeError, json.JSONDecodeError) as e:
        raise MalformedResponseError(f"Tool call arguments are not valid JSON: {str(e)}")

    if not isinstance(arguments, dict):
        raise MalformedResponseError("Tool call arguments must be a JSON object")

    city = arguments.get("city")
    if isinstance(city, str):
        arguments = {**arguments, "city": city.strip()}

    try:
        return WeatherToolArguments(**arguments)
    except ValidationError as e:
        raise MalformedResponseError(f"Tool call arguments do not match {WEATHER_TOOL_NAME}: {str(e)}")
