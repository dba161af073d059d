"""Normalize provider weather records into ``WeatherDay``.

Providers name the same measurement differently (``temperature_max`` vs
``Temp_air_max`` vs Open-Meteo's ``temperature_2m_max``). This module is the
only place that knows those names; everything downstream sees ``WeatherDay``.

Values that are missing, non-numeric, or non-finite become ``None`` so the
engine can flag them instead of computing with garbage.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any

from agro_advisor.datasources.weather.models import WeatherDay

logger = logging.getLogger(__name__)

# Canonical field -> accepted provider names, in priority order
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "max_temp": ("max_temp", "temperature_max", "Temp_air_max", "temperature_2m_max", "tmax"),
    "min_temp": ("min_temp", "temperature_min", "Temp_air_min", "temperature_2m_min", "tmin"),
    "rainfall_mm": ("rainfall_mm", "rainfall", "precipitation", "precipitation_sum", "Rain"),
    "wind_speed": ("wind_speed", "windSpeed", "wind_speed_10m_max", "Windspeed"),
    "humidity_pct": ("humidity_pct", "humidity", "relative_humidity_2m_mean", "Rel_humidity"),
}

DATE_ALIASES = ("date", "Date", "time")


def to_float(value: Any) -> float | None:
    """Coerce a provider value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    msg = f"Unusable date value: {value!r}"
    raise ValueError(msg)


def _first_present(raw: dict[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        if raw.get(name) is not None:
            return raw[name]
    return None


def normalize_record(raw: dict[str, Any]) -> WeatherDay:
    """Convert one provider record (any supported field names) to a WeatherDay.

    Args:
        raw: Provider dict with a date key and any of the aliased fields.

    Returns:
        WeatherDay with missing/non-numeric measurements set to None.

    Raises:
        ValueError: If the record has no parseable date.
    """
    day = _parse_date(_first_present(raw, DATE_ALIASES))
    values = {field: to_float(_first_present(raw, names)) for field, names in FIELD_ALIASES.items()}
    missing = [field for field, v in values.items() if v is None]
    if missing:
        logger.debug("Weather record %s missing %s", day.isoformat(), ", ".join(missing))
    return WeatherDay(date=day, **values)


def normalize_records(records: list[dict[str, Any]]) -> list[WeatherDay]:
    """Normalize a list of provider records, sorted ascending by date."""
    return sorted((normalize_record(r) for r in records), key=lambda d: d.date)


def normalize_open_meteo(response: dict[str, Any]) -> list[WeatherDay]:
    """Convert an Open-Meteo ``daily`` column block into WeatherDays.

    Args:
        response: Raw API response (or stored payload) with a ``daily`` key
            holding parallel arrays keyed by variable name.

    Returns:
        WeatherDays sorted ascending by date.
    """
    daily = response.get("daily", {})
    dates = daily.get("time", [])
    columns = {name: values for name, values in daily.items() if name != "time"}

    records: list[dict[str, Any]] = []
    for i, day in enumerate(dates):
        record: dict[str, Any] = {"date": day}
        for name, values in columns.items():
            record[name] = values[i] if i < len(values) else None
        records.append(record)
    return normalize_records(records)


def _is_complete(day: WeatherDay) -> bool:
    return day.max_temp is not None and day.min_temp is not None


def merge_weather_days(primary: list[WeatherDay], fallback: list[WeatherDay]) -> list[WeatherDay]:
    """Fill days missing from ``primary`` with days from ``fallback``.

    The archive API lags real time by several days; those trailing days come
    back with null temperatures. A ``fallback`` day replaces a ``primary``
    day only when the primary one lacks temperatures and the fallback has
    them. Dates present only in ``fallback`` are added.

    Returns:
        Merged WeatherDays sorted ascending by date.
    """
    merged = {day.date: day for day in primary}
    for day in fallback:
        existing = merged.get(day.date)
        if existing is None or (not _is_complete(existing) and _is_complete(day)):
            merged[day.date] = day
    return [merged[d] for d in sorted(merged)]
