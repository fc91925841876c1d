import structlog
from fastapi import APIRouter, Depends, status, HTTPException

from src.api.auth import verify_token
from src.exceptions import (
    CityNotFoundError,
    ConfigurationError,
    MalformedResponseError,
    WeatherServiceError,
)
from src.models.orchestrator import WeatherPanel
from src.services.weather_service import weather_service

logger = structlog.get_logger(__name__)

# Create router
router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("/current/{city}", summary="Get Current Weather")
async def get_current_weather(city: str, authenticated: bool = Depends(verify_token)):
    """
    Get current weather data for a specific city straight from the provider.

    Args:
        city: City name to query.
        authenticated: Dependency that enforces optional token verification.

    Returns:
        JSON object with the weather record and its display panel.

    Raises:
        HTTPException: 404 if city not found, 503 if no provider key is
            configured, 502 for provider failures.
    """
    logger.info(
        "API request: Get current weather",
        city=city,
        authenticated=authenticated
    )
    try:
        weather_record = await weather_service.get_current_weather(city)

    except CityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    except ConfigurationError as e:
        logger.error("Weather provider is not configured", error=str(e))
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    except (WeatherServiceError, MalformedResponseError) as e:
        logger.error("Failed to get current weather", city=city, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to get weather for {city}: {str(e)}",
        )

    return {
        "weather": weather_record.model_dump(by_alias=True),
        "panel": WeatherPanel.from_record(weather_record).model_dump(),
    }
