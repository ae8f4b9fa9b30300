from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from app.core.errors import MalformedUpstreamPayload
from app.schemas.forecast import CurrentConditions, DailySummary, ForecastTarget, HourlyEntry
from app.schemas.provider import RawForecastPoint, RawObservation
from app.services.conditions import classify_condition
from app.services.units import UnitProfile

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

MAX_DAILY_SUMMARIES = 7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf (21.5 -> 22, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def _local_datetime(ts: int, utc_offset_s: int = 0) -> datetime:
    return datetime.fromtimestamp(ts, tz=timezone(timedelta(seconds=utc_offset_s)))


def iso_timestamp(ts: int) -> str:
    """Epoch seconds -> absolute ISO-8601 UTC string, e.g. `2026-10-19T12:00:00Z`."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def weekday_name(ts: int, utc_offset_s: int = 0) -> str:
    """English weekday name of the local day, independent of the process locale."""
    return WEEKDAYS[_local_datetime(ts, utc_offset_s).weekday()]


def day_key(ts: int, utc_offset_s: int = 0, by_date: bool = False) -> str:
    """
    Grouping label for a forecast sample.

    By default this is the local weekday name, which does not distinguish the
    same weekday in two different weeks. With `by_date=True` the local ISO
    calendar date is used instead.
    """
    if by_date:
        return _local_datetime(ts, utc_offset_s).date().isoformat()
    return weekday_name(ts, utc_offset_s)


# ---------------------------------------------------------------------
# Forecast series
# ---------------------------------------------------------------------

def bucketize_hourly(
    points: Optional[Iterable[RawForecastPoint]],
    utc_offset_s: int = 0,
    by_date: bool = False,
) -> Dict[str, List[HourlyEntry]]:
    """
    Group forecast samples by day-key, keeping input order within each bucket.

    `None` is treated as an empty series.
    """
    buckets: Dict[str, List[HourlyEntry]] = {}
    for point in points or ():
        key = day_key(point.dt, utc_offset_s, by_date)
        entry = HourlyEntry(
            dt=iso_timestamp(point.dt),
            temperature=round_half_up(point.main.temp),
            condition=point.condition,
            category=classify_condition(point.condition),
        )
        buckets.setdefault(key, []).append(entry)
    return buckets


def summarize_daily(
    points: Optional[Iterable[RawForecastPoint]],
    utc_offset_s: int = 0,
    by_date: bool = False,
    max_days: int = MAX_DAILY_SUMMARIES,
) -> List[DailySummary]:
    """
    Build at most `max_days` daily summaries in first-seen order.

    The first sample of a day sets its condition and initial high/low; later
    samples of that day only widen high/low. Once `max_days` distinct days are
    tracked, samples belonging to any other day are ignored.
    """
    # dict preserves insertion order, which gives first-seen ordering
    acc: Dict[str, Dict[str, Any]] = {}

    for point in points or ():
        key = day_key(point.dt, utc_offset_s, by_date)
        high = round_half_up(point.main.temp_max)
        low = round_half_up(point.main.temp_min)

        record = acc.get(key)
        if record is None:
            if len(acc) >= max_days:
                continue
            acc[key] = {
                "day_key": key,
                "day_name": weekday_name(point.dt, utc_offset_s),
                "condition": point.condition,
                "high_temp": high,
                "low_temp": low,
            }
            continue

        record["high_temp"] = max(record["high_temp"], high)
        record["low_temp"] = min(record["low_temp"], low)

    return [
        DailySummary(category=classify_condition(rec["condition"]), **rec)
        for rec in acc.values()
    ]


# ---------------------------------------------------------------------
# Current conditions
# ---------------------------------------------------------------------

def parse_observation(raw: Any) -> RawObservation:
    """
    Validate the provider current-weather payload.

    Raises:
        MalformedUpstreamPayload: required numeric or structural fields are missing.
    """
    if not isinstance(raw, dict):
        raise MalformedUpstreamPayload()
    try:
        return RawObservation.model_validate(raw)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise MalformedUpstreamPayload(
            f"Unexpected response from weather provider (invalid fields: {', '.join(fields)})"
        ) from e


def normalize_current(raw: Any, units: UnitProfile) -> Tuple[CurrentConditions, ForecastTarget]:
    """
    Turn the current-weather payload into the client snapshot.

    Returns the snapshot together with the coordinates and UTC offset needed
    by the forecast stage.
    """
    obs = parse_observation(raw)

    try:
        current = CurrentConditions(
            temperature=round_half_up(obs.main.temp),
            condition=obs.condition,
            category=classify_condition(obs.condition),
            humidity=obs.main.humidity,
            wind_speed=round_half_up(obs.wind.speed * units.wind_speed_scale),
            precipitation=obs.rain.one_hour if obs.rain else 0,
            dt=iso_timestamp(obs.dt),
            city=obs.name,
            country=obs.sys.country,
        )
    except (ValueError, OverflowError) as e:
        # finite values can still overflow once scaled, e.g. wind speed * 3.6
        raise MalformedUpstreamPayload() from e
    target = ForecastTarget(lat=obs.coord.lat, lon=obs.coord.lon, utc_offset_s=obs.timezone)
    return current, target
