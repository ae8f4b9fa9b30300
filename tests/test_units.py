import pytest

from app.services.units import resolve_units


def test_metric_scales_wind_to_kmh():
    profile = resolve_units("metric")
    assert profile.system == "metric"
    assert profile.wind_speed_scale == 3.6
    assert (profile.temperature_unit, profile.wind_speed_unit, profile.precipitation_unit) == ("°C", "km/h", "mm")


def test_imperial_passes_wind_through():
    profile = resolve_units("imperial")
    assert profile.system == "imperial"
    assert profile.wind_speed_scale == 1.0
    assert (profile.temperature_unit, profile.wind_speed_unit, profile.precipitation_unit) == ("°F", "mph", "in")


@pytest.mark.parametrize("token", [None, "", "kelvin", "standard", "metricx"])
def test_unrecognized_token_defaults_to_metric(token):
    assert resolve_units(token).system == "metric"


def test_token_matching_ignores_case_and_whitespace():
    assert resolve_units("  Imperial ").system == "imperial"
