from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.core.errors import ConfigurationError
from app.services.units import UnitProfile

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """
    OpenWeatherMap client.

    Endpoints used:
    - Current weather by city name: /data/2.5/weather?q={location}&units={units}
    - 5 day / 3 hour forecast by coordinates: /data/2.5/forecast?lat={lat}&lon={lon}&units={units}
    - Direct geocoding: /geo/1.0/direct?q={query}&limit={limit}

    Every method performs a single request and raises `httpx.HTTPStatusError`
    on non-2xx responses. Classifying those errors is up to the caller.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        geo_url: str | None = None,
        timeout_s: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.owm_api_key
        if not self.api_key:
            raise ConfigurationError()
        self.base_url = (base_url or settings.owm_base_url).rstrip("/")
        self.geo_url = (geo_url or settings.owm_geo_url).rstrip("/")
        self.timeout = timeout_s or settings.upstream_timeout_s
        self.transport = transport

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        # appid is appended here so callers never handle the key
        query = {**params, "appid": self.api_key}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.get(url, params=query, headers={"accept": "application/json"})
            logger.debug("GET %s -> %s", url, r.status_code)
            r.raise_for_status()
            return r.json()

    async def current_by_name(self, location: str, units: UnitProfile) -> Any:
        return await self._get_json(
            f"{self.base_url}/weather",
            {"q": location, "units": units.system},
        )

    async def forecast_by_coords(self, lat: float, lon: float, units: UnitProfile) -> Any:
        return await self._get_json(
            f"{self.base_url}/forecast",
            {"lat": lat, "lon": lon, "units": units.system},
        )

    async def geocode(self, query: str, limit: int | None = None) -> Any:
        return await self._get_json(
            f"{self.geo_url}/direct",
            {"q": query, "limit": limit or settings.geocoding_limit},
        )
