from src.models.orchestrator.orchestration_result import OrchestrationResult
from src.models.orchestrator.query_request import OrchestratorQueryRequest
from src.models.orchestrator.query_response import OrchestratorQueryResponse
from src.models.orchestrator.weather_panel import WeatherPanel

__all__ = [
    "OrchestrationResult",
    "OrchestratorQueryRequest",
    "OrchestratorQueryResponse",
    "WeatherPanel",
]
