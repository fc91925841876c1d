from typing import Optional

from pydantic import BaseModel, Field

from src.models.orchestrator.orchestration_result import OrchestrationResult
from src.models.orchestrator.weather_panel import WeatherPanel
from src.models.weather.weather import WeatherRecord


class OrchestratorQueryResponse(BaseModel):
    """API response for a query: error banner, AI answer and weather panel."""

    query: str = Field(..., description="Query as submitted")
    ai_response: Optional[str] = Field(default=None, description="Final natural-language answer")
    weather: Optional[WeatherRecord] = Field(default=None, description="Raw weather record")
    weather_panel: Optional[WeatherPanel] = Field(default=None, description="Display-ready weather panel")
    error: Optional[str] = Field(default=None, description="User-visible error message")
    ignored_tool_calls: int = Field(default=0, description="Tool calls that were not executed")
    generation: int = Field(default=0, description="Submission number within the session")
    superseded: bool = Field(default=False, description="Whether a newer submission replaced this one")
    processing_time: float = Field(default=0.0, description="Seconds spent processing")

    @classmethod
    def from_result(cls, result: OrchestrationResult) -> "OrchestratorQueryResponse":
        return cls(
            query=result.query,
            ai_response=result.ai_response,
            weather=result.weather,
            weather_panel=WeatherPanel.from_record(result.weather) if result.weather else None,
            error=result.error,
            ignored_tool_calls=result.ignored_tool_calls,
            generation=result.generation,
            superseded=result.superseded,
            processing_time=result.processing_time,
        )
