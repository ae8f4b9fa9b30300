import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.errors import UpstreamError, WeatherServiceError
from app.schemas.forecast import ErrorResponse, ForecastResponse
from app.services.weather_service import WeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get(
    "",
    response_model=ForecastResponse,
    summary="Current conditions and forecast for a location",
    description=(
        "Looks up current weather for a free-text location, then the 5 day / 3 hour "
        "forecast for its coordinates.\n\n"
        "- `hourlyByDay` groups forecast samples by day-key.\n"
        "- `daily` holds at most 7 summaries with high/low temperatures.\n"
        "- If the forecast call fails, both are returned empty instead of failing the request."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Missing location"},
        404: {"model": ErrorResponse, "description": "Location not found"},
        500: {"model": ErrorResponse, "description": "Misconfiguration or provider failure"},
    },
)
async def get_weather(
    location: Optional[str] = Query(None, description="Free-text location, e.g. 'Casablanca'"),
    unit: Optional[str] = Query("metric", description="Unit system: 'metric' or 'imperial'"),
    service: WeatherService = Depends(get_weather_service),
) -> ForecastResponse:
    try:
        return await service.get_forecast(location, unit)
    except WeatherServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected error building forecast for %r", location)
        raise UpstreamError() from e
