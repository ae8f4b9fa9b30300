from typing import Any, Dict, List, Optional

import httpx
import pytest

from app.main import app
from app.services.weather_service import WeatherService, get_weather_service

TEST_API_KEY = "test-key-123"

# Monday 2026-10-19 00:00:00 UTC
MONDAY_MIDNIGHT_UTC = 1792368000
THREE_HOURS = 3 * 3600


def make_current(
    temp: float = 21.4,
    humidity: Any = 60,
    wind: float = 4.2,
    condition: Optional[str] = "Clouds",
    rain_1h: Optional[float] = None,
    dt: int = MONDAY_MIDNIGHT_UTC,
    name: str = "Casablanca",
    country: str = "MA",
    timezone: int = 0,
) -> Dict[str, Any]:
    """
    Build an OpenWeatherMap current-weather payload.
    """
    payload: Dict[str, Any] = {
        "coord": {"lon": -7.6114, "lat": 33.5883},
        "weather": [{"id": 803, "main": condition, "description": "broken clouds", "icon": "04d"}]
        if condition
        else [],
        "base": "stations",
        "main": {"temp": temp, "feels_like": temp, "pressure": 1017, "humidity": humidity},
        "visibility": 10000,
        "wind": {"speed": wind, "deg": 310},
        "dt": dt,
        "sys": {"country": country},
        "timezone": timezone,
        "id": 2553604,
        "name": name,
        "cod": 200,
    }
    if rain_1h is not None:
        payload["rain"] = {"1h": rain_1h}
    return payload


def make_point(
    dt: int,
    temp: float = 20.0,
    temp_min: Optional[float] = None,
    temp_max: Optional[float] = None,
    condition: Optional[str] = "Clear",
) -> Dict[str, Any]:
    """
    Build one item of the forecast `list`.
    """
    return {
        "dt": dt,
        "main": {
            "temp": temp,
            "temp_min": temp if temp_min is None else temp_min,
            "temp_max": temp if temp_max is None else temp_max,
            "humidity": 55,
        },
        "weather": [{"main": condition, "description": condition.lower()}] if condition else [],
        "dt_txt": "",
    }


def make_forecast(points: List[Dict[str, Any]], timezone: Optional[int] = 0) -> Dict[str, Any]:
    city: Dict[str, Any] = {"id": 2553604, "name": "Casablanca", "country": "MA"}
    if timezone is not None:
        city["timezone"] = timezone
    return {"cod": "200", "message": 0, "cnt": len(points), "list": points, "city": city}


def make_series(count: int, start: int = MONDAY_MIDNIGHT_UTC, step: int = THREE_HOURS) -> List[Dict[str, Any]]:
    """
    `count` samples every `step` seconds with temperatures cycling 10..17.
    """
    return [make_point(start + i * step, temp=10 + (i % 8), temp_min=9 + (i % 8), temp_max=11 + (i % 8)) for i in range(count)]


class FakeProvider:
    """
    Stand-in for OpenWeatherMap behind `httpx.MockTransport`.

    Responses are registered per path suffix (`/weather`, `/forecast`, `/direct`);
    every request is recorded so tests can assert what was (not) called.
    """

    def __init__(self):
        self.routes: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def respond(self, suffix: str, status: int = 200, json: Any = None, content: Optional[bytes] = None) -> None:
        self.routes[suffix] = (status, json, content)

    def fail(self, suffix: str, exc: Exception) -> None:
        self.routes[suffix] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, route in self.routes.items():
            if request.url.path.endswith(suffix):
                if isinstance(route, Exception):
                    raise route
                status, body, content = route
                if content is not None:
                    return httpx.Response(status, content=content)
                return httpx.Response(status, json=body)
        return httpx.Response(500, json={"cod": 500, "message": "unexpected path"})

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def weather_service(provider):
    return WeatherService(
        api_key=TEST_API_KEY,
        transport=provider.transport,
        max_days=7,
        group_by_date=False,
    )


@pytest.fixture
def test_app(weather_service):
    """
    Return the FastAPI app with the weather service overridden to use the fake provider.
    """
    app.dependency_overrides[get_weather_service] = lambda: weather_service
    yield app
    app.dependency_overrides.clear()
