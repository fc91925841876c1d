import json
import os
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

# Keep test runs from writing log files
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from src.models.completion.completion import ChatCompletionResponse
from src.models.weather.weather import WeatherRecord


def completion_payload(
        content: Optional[str] = None,
        tool_calls: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """Build a chat completion body in the shape the OpenAI SDK dumps."""
    message: Dict[str, Any] = {"role": "assistant", "content": content, "refusal": None}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "message": message,
                "finish_reason": "tool_calls" if tool_calls else "stop",
            }
        ],
    }


def tool_call(name: str = "get_current_weather", arguments: Any = None, call_id: str = "call_1") -> Dict[str, Any]:
    if arguments is None:
        arguments = {"city": "London"}
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


def make_completion(content: Optional[str] = None, tool_calls=None) -> ChatCompletionResponse:
    return ChatCompletionResponse.model_validate(completion_payload(content, tool_calls))


@pytest.fixture
def mock_config():
    """Mock the config object."""
    mock_config = MagicMock()
    mock_config.openai_api_key = "test-openai-key"
    mock_config.openai_base_url = "https://api.openai.com/v1"
    mock_config.openai_model = "gpt-3.5-turbo"
    mock_config.openweather_api_key = "test-weather-key"
    mock_config.openweather_base_url = "https://api.openweathermap.org/data/2.5/weather"
    mock_config.openweather_units = "metric"
    mock_config.api_token = None
    mock_config.max_sessions = 10
    return mock_config


@pytest.fixture
def openweather_payload():
    """OpenWeatherMap current weather body for London."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "base": "stations",
        "main": {
            "temp": 15,
            "feels_like": 14.2,
            "temp_min": 13.9,
            "temp_max": 16.1,
            "pressure": 1012,
            "humidity": 60,
        },
        "visibility": 10000,
        "wind": {"speed": 3.1, "deg": 240},
        "clouds": {"all": 0},
        "dt": 1696161600,
        "sys": {"type": 2, "id": 2075535, "country": "GB", "sunrise": 1696138800, "sunset": 1696182000},
        "timezone": 3600,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


@pytest.fixture
def sample_weather_record():
    """Weather record matching openweather_payload."""
    return WeatherRecord(
        temperature=15,
        description="clear sky",
        humidity=60,
        wind_speed=3.1,
        city_name="London",
    )


@pytest.fixture
def mock_completion_service():
    """Mock completion service; `complete` is awaited by the agent."""
    mock_service = MagicMock()
    mock_service.complete = AsyncMock()
    mock_service.ensure_configured = MagicMock()
    return mock_service


@pytest.fixture
def mock_weather_service():
    """Mock weather service for testing."""
    mock_service = MagicMock()
    mock_service.get_current_weather = AsyncMock()
    return mock_service


@pytest.fixture
def weather_agent(mock_completion_service, mock_weather_service):
    """A fresh WeatherAgent wired to mocked services."""
    from agent.weather_agent import WeatherAgent

    WeatherAgent.reset_instance()
    agent = WeatherAgent()
    agent.completion_service = mock_completion_service
    agent.weather_service = mock_weather_service
    yield agent
    WeatherAgent.reset_instance()


@pytest.fixture
def mock_async_client():
    """Patch httpx.AsyncClient and yield the client used inside `async with`."""
    with patch('httpx.AsyncClient') as mock_client_class:
        mock_client = AsyncMock()
        mock_client_class.return_value.__aenter__.return_value = mock_client
        yield mock_client
