"""Daily weather forecast from Open-Meteo Forecast API."""

from __future__ import annotations

from typing import Any

from agro_advisor.datasources.weather.client import DAILY_VARS, OPEN_METEO_API, UNIT_PARAMS
from agro_advisor.services.http import session


def fetch_forecast(
    lat: float,
    lon: float,
    *,
    forecast_days: int = 7,
    past_days: int = 0,
    timezone: str = "auto",
) -> dict[str, Any]:
    """
    Fetch a multi-day daily forecast from Open-Meteo.

    Args:
        lat: Latitude.
        lon: Longitude.
        forecast_days: Number of days to forecast (max 16).
        past_days: Number of recent past days to include (max 92).
        timezone: IANA timezone for day boundaries (``auto`` = local to point).

    Returns:
        Raw API response dict with ``daily`` key containing arrays.
    """
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "daily": DAILY_VARS,
        "timezone": timezone,
        "forecast_days": forecast_days,
        "past_days": past_days,
        **UNIT_PARAMS,
    }

    resp = session.get(OPEN_METEO_API, params=params)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
