from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.

    Provider credentials are optional here: a missing key is reported as a
    ConfigurationError when a query actually needs it, so the service still
    starts and can answer with a readable error.
    """

    # API Keys
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key for completions")
    openweather_api_key: Optional[str] = Field(default=None, description="OpenWeatherMap API key for weather data")

    # OpenAI Configuration
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", description="Base URL of the chat completion API"
    )
    openai_model: str = Field(default="gpt-3.5-turbo", description="Completion model name")

    # OpenWeatherMap Configuration
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="OpenWeatherMap current weather endpoint",
    )
    openweather_units: str = Field(default="metric", description="Temperature units (metric/imperial)")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="FastAPI host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="FastAPI port")
    api_token: Optional[str] = Field(default=None, description="API authentication token")
    max_sessions: int = Field(default=1000, ge=1, description="Maximum number of tracked query sessions")

    # Logging Configuration
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json/text)")
    log_to_file: bool = Field(default=True, description="Also write logs to the logs/ directory")

    @field_validator("openai_api_key", "openweather_api_key")
    def blank_key_is_missing(cls, v):
        # Treat an empty or whitespace value in .env as not configured
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'text'")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


config = Config()
