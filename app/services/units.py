from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_UNIT_SYSTEM = "metric"


@dataclass(frozen=True)
class UnitProfile:
    """
    Conversion profile for one unit system.

    The provider is queried with the same `units` parameter, so temperature and
    precipitation arrive already in the right unit and only need a label.
    Wind speed is the exception: metric requests return m/s, which we expose
    as km/h, so it carries a multiplicative scale.
    """

    system: str
    temperature_unit: str
    wind_speed_unit: str
    precipitation_unit: str
    wind_speed_scale: float


UNIT_PROFILES: Dict[str, UnitProfile] = {
    "metric": UnitProfile(
        system="metric",
        temperature_unit="°C",
        wind_speed_unit="km/h",
        precipitation_unit="mm",
        wind_speed_scale=3.6,
    ),
    "imperial": UnitProfile(
        system="imperial",
        temperature_unit="°F",
        wind_speed_unit="mph",
        precipitation_unit="in",
        wind_speed_scale=1.0,
    ),
}


def resolve_units(token: Optional[str]) -> UnitProfile:
    """
    Map a requested unit token to its profile.

    Anything other than `metric` / `imperial` (case-insensitive) resolves to
    the metric profile.
    """
    key = (token or "").strip().lower()
    profile = UNIT_PROFILES.get(key)
    if profile is None:
        if token:
            logger.debug("Unrecognized unit system %r, defaulting to %s", token, DEFAULT_UNIT_SYSTEM)
        profile = UNIT_PROFILES[DEFAULT_UNIT_SYSTEM]
    return profile
