import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.errors import UpstreamError, WeatherServiceError
from app.schemas.forecast import ErrorResponse, LocationSuggestion
from app.services.weather_service import WeatherService, get_weather_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/geocoding", tags=["Geocoding"])


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    summary="Location suggestions",
    description=(
        "Returns provider geocoding candidates (`name`, `country`, `state`, `lat`, `lon`) "
        "for a partial query, exactly as the provider sent them."
    ),
    responses={
        200: {"model": List[LocationSuggestion], "description": "Provider candidates"},
        400: {"model": ErrorResponse, "description": "Missing query"},
        500: {"model": ErrorResponse, "description": "Misconfiguration or provider failure"},
    },
)
async def get_suggestions(
    q: Optional[str] = Query(None, description="Partial location name"),
    service: WeatherService = Depends(get_weather_service),
):
    try:
        return await service.suggest_locations(q)
    except WeatherServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected error fetching suggestions for %r", q)
        raise UpstreamError("Failed to fetch location suggestions") from e
