from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import (
    ConfigurationError,
    InvalidInput,
    NotFound,
    Unauthorized,
    UpstreamError,
)
from app.schemas.forecast import ForecastResponse, ForecastTarget, UnitLabels
from app.schemas.provider import RawForecast
from app.services.forecast_aggregation import (
    MAX_DAILY_SUMMARIES,
    bucketize_hourly,
    normalize_current,
    summarize_daily,
)
from app.services.providers.openweather_client import OpenWeatherClient
from app.services.units import UnitProfile, resolve_units

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Builds the forecast response for a free-text location.

    Two sequential provider calls:
    1. current weather by name -> snapshot + coordinates (failures are fatal)
    2. forecast by coordinates -> hourly buckets + daily summaries
       (failures degrade to empty collections)
    """

    def __init__(
        self,
        api_key: str | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_days: int | None = None,
        group_by_date: bool | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.owm_api_key
        self.transport = transport
        self.max_days = min(max_days or settings.forecast_max_days, MAX_DAILY_SUMMARIES)
        self.group_by_date = settings.group_forecast_by_date if group_by_date is None else group_by_date

    def _client(self) -> OpenWeatherClient:
        if not self.api_key:
            logger.error("OWM_API_KEY is not configured")
            raise ConfigurationError()
        return OpenWeatherClient(api_key=self.api_key, transport=self.transport)

    # ------------------------------------------------------------------
    # Forecast
    # ------------------------------------------------------------------

    async def get_forecast(self, location: Optional[str], unit: Optional[str] = None) -> ForecastResponse:
        if not location or not location.strip():
            raise InvalidInput("Location parameter is required")

        client = self._client()
        units = resolve_units(unit)

        raw_current = await self._fetch_current(client, location, units)
        current, target = normalize_current(raw_current, units)

        forecast = await self._fetch_forecast(client, target, units)
        points = forecast.points if forecast else []
        # city.timezone from the forecast wins over the current-weather offset
        offset = target.utc_offset_s
        if forecast and forecast.city and forecast.city.timezone is not None:
            offset = forecast.city.timezone

        try:
            hourly_by_day = bucketize_hourly(points, offset, self.group_by_date)
            daily = summarize_daily(points, offset, self.group_by_date, self.max_days)
        except (ValueError, OverflowError, OSError) as e:
            logger.warning("Forecast values could not be aggregated (%s); returning empty forecast", type(e).__name__)
            hourly_by_day, daily = {}, []

        return ForecastResponse(
            **current.model_dump(),
            hourly_by_day=hourly_by_day,
            daily=daily,
            unit=units.system,
            units=UnitLabels(
                temperature=units.temperature_unit,
                wind_speed=units.wind_speed_unit,
                precipitation=units.precipitation_unit,
            ),
        )

    async def _fetch_current(self, client: OpenWeatherClient, location: str, units: UnitProfile) -> Any:
        logger.info("Fetching current weather for %r (%s)", location, units.system)
        try:
            return await client.current_by_name(location, units)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Current weather request failed with status %s", status)
            if status == 404:
                raise NotFound() from e
            if status == 401:
                raise Unauthorized() from e
            raise UpstreamError() from e
        except httpx.HTTPError as e:
            logger.warning("Current weather request failed: %s", type(e).__name__)
            raise UpstreamError() from e
        except ValueError as e:
            logger.warning("Current weather response is not valid JSON")
            raise UpstreamError() from e

    async def _fetch_forecast(
        self,
        client: OpenWeatherClient,
        target: ForecastTarget,
        units: UnitProfile,
    ) -> Optional[RawForecast]:
        """
        Fetch and validate the forecast series.

        Any failure is logged and yields None, which the caller renders as
        empty `hourlyByDay` and `daily`.
        """
        try:
            raw = await client.forecast_by_coords(target.lat, target.lon, units)
        except httpx.HTTPStatusError as e:
            logger.warning("Forecast request failed with status %s; returning empty forecast", e.response.status_code)
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Forecast request failed (%s); returning empty forecast", type(e).__name__)
            return None

        try:
            return RawForecast.model_validate(raw)
        except ValidationError as e:
            logger.warning("Forecast payload has unexpected shape (%d errors); returning empty forecast", e.error_count())
            return None

    # ------------------------------------------------------------------
    # Location suggestions
    # ------------------------------------------------------------------

    async def suggest_locations(self, query: Optional[str]) -> List[Dict[str, Any]]:
        """
        Return the provider geocoding candidates unchanged.

        Only the envelope is checked: a list of JSON objects.
        """
        if not query or not query.strip():
            raise InvalidInput("Query parameter 'q' is required")

        client = self._client()
        message = "Failed to fetch location suggestions"

        try:
            data = await client.geocode(query)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Geocoding request failed (%s)", type(e).__name__)
            raise UpstreamError(message) from e

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.warning("Geocoding response is not a list of objects")
            raise UpstreamError(message)

        return data


def get_weather_service() -> WeatherService:
    """
    FastAPI dependency that provides a `WeatherService`.

    Overridden in tests to inject a mocked provider transport.
    """
    return WeatherService()
