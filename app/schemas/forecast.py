from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.services.conditions import ConditionCategory


class _CamelModel(BaseModel):
    """
    Response models serialize with camelCase keys (`windSpeed`, `hourlyByDay`).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class HourlyEntry(_CamelModel):
    """
    One forecast sample, normalized for the client.
    """

    dt: str = Field(..., description="Sample instant, ISO-8601 UTC")
    temperature: int
    condition: Optional[str] = Field(None, description="Provider condition text, e.g. 'Clouds'")
    category: ConditionCategory


class DailySummary(_CamelModel):
    """
    Aggregate of all forecast samples sharing one day-key.
    """

    day_key: str = Field(..., description="Grouping key, also the key into `hourlyByDay`")
    day_name: str = Field(..., description="Weekday name for display")
    condition: Optional[str] = Field(None, description="Condition of the first sample of the day")
    category: ConditionCategory
    high_temp: int
    low_temp: int


class UnitLabels(_CamelModel):
    temperature: str
    wind_speed: str
    precipitation: str


class CurrentConditions(_CamelModel):
    """
    Current-weather snapshot.
    """

    temperature: int
    condition: Optional[str] = None
    category: ConditionCategory
    humidity: Union[int, float]
    wind_speed: int
    precipitation: float
    dt: str = Field(..., description="Observation instant, ISO-8601 UTC")
    city: Optional[str] = None
    country: Optional[str] = None


class ForecastResponse(CurrentConditions):
    """
    Response payload for `GET /weather`.
    """

    hourly_by_day: Dict[str, List[HourlyEntry]] = Field(default_factory=dict)
    daily: List[DailySummary] = Field(default_factory=list)
    unit: str = Field(..., description="Resolved unit system: metric or imperial")
    units: UnitLabels


class ForecastTarget(BaseModel):
    """
    Typed hand-off from the current-conditions stage to the forecast stage.
    """

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float
    utc_offset_s: int = 0


class ErrorResponse(BaseModel):
    error: str


class LocationSuggestion(BaseModel):
    """
    Documented shape of a geocoding candidate. Candidates are returned as the
    provider sent them; this model only describes them in the OpenAPI schema.

    Extra provider fields (e.g. `local_names`) may be present.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    country: Optional[str] = None
    state: Optional[str] = None
    lat: float
    lon: float
