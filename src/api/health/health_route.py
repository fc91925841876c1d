from datetime import datetime, timezone

from fastapi import APIRouter

from src.services.completion_service import completion_service
from src.services.weather_service import weather_service

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", summary="API Health Check")
async def get_health():
    """Basic health check endpoint, including which provider keys are configured."""

    return {
        "message": "Weather Assistant API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "providers": {
            "openai_configured": completion_service.is_configured,
            "openweather_configured": weather_service.is_configured,
        },
    }
