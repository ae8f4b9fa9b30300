from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Instants before year 3000, so local dates stay representable after any UTC offset
EpochSeconds = Annotated[int, Field(ge=0, lt=32503680000)]
UtcOffsetSeconds = Annotated[int, Field(gt=-86400, lt=86400)]


class _ProviderModel(BaseModel):
    """
    Base for raw OpenWeatherMap payload fragments.

    Unknown provider fields are ignored; only what the pipeline reads is declared.
    NaN and Infinity are rejected for every float field.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, allow_inf_nan=False)


class RawCoordinates(_ProviderModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class RawCondition(_ProviderModel):
    main: Optional[str] = None
    description: Optional[str] = None


class RawMain(_ProviderModel):
    temp: float
    humidity: Union[int, float]


class RawWind(_ProviderModel):
    speed: float


class RawPrecipitation(_ProviderModel):
    one_hour: float = Field(default=0.0, alias="1h")


class RawSys(_ProviderModel):
    country: Optional[str] = None


class RawObservation(_ProviderModel):
    """
    Current-weather payload (`/weather?q=...`).
    """

    coord: RawCoordinates
    weather: List[RawCondition] = Field(default_factory=list)
    main: RawMain
    wind: RawWind
    rain: Optional[RawPrecipitation] = None
    dt: EpochSeconds
    name: Optional[str] = None
    sys: RawSys = Field(default_factory=RawSys)
    timezone: UtcOffsetSeconds = Field(default=0, description="Shift in seconds from UTC")

    @property
    def condition(self) -> Optional[str]:
        return self.weather[0].main if self.weather else None


class RawForecastMain(_ProviderModel):
    temp: float
    temp_min: float
    temp_max: float


class RawForecastPoint(_ProviderModel):
    """
    One sample of the 3-hourly forecast (`/forecast?lat=...&lon=...`, `list[]` item).
    """

    dt: EpochSeconds
    main: RawForecastMain
    weather: List[RawCondition] = Field(default_factory=list)

    @property
    def condition(self) -> Optional[str]:
        return self.weather[0].main if self.weather else None


class RawForecastCity(_ProviderModel):
    timezone: Optional[UtcOffsetSeconds] = None


class RawForecast(_ProviderModel):
    points: List[RawForecastPoint] = Field(alias="list")
    city: Optional[RawForecastCity] = None
