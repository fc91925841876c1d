from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.weather.weather import WeatherRecord


class OrchestrationResult(BaseModel):
    """
    Outcome of one query submission.

    Either an error, or an AI answer optionally accompanied by the weather
    record the answer was based on. Never both an error and an answer.
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., description="Query as submitted")
    ai_response: Optional[str] = Field(default=None, description="Final natural-language answer")
    weather: Optional[WeatherRecord] = Field(default=None, description="Weather record from the tool call")
    error: Optional[str] = Field(default=None, description="User-visible error message")
    ignored_tool_calls: int = Field(default=0, ge=0, description="Tool calls beyond the first that were not executed")
    generation: int = Field(default=0, ge=0, description="Submission number within the session")
    superseded: bool = Field(default=False, description="A newer submission replaced this one before it finished")
    processing_time: float = Field(default=0.0, ge=0, description="Seconds spent processing")

    @model_validator(mode="after")
    def check_outcome(self) -> "OrchestrationResult":
        if self.error is not None:
            if self.ai_response is not None or self.weather is not None:
                raise ValueError("an error result cannot carry an answer or weather record")
        elif self.ai_response is None:
            raise ValueError("a successful result must carry an answer")
        return self

    @property
    def succeeded(self) -> bool:
        return self.error is None
