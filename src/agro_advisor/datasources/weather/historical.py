"""Historical daily weather from Open-Meteo Archive API."""

from __future__ import annotations

from typing import Any

from agro_advisor.datasources.weather.client import (
    DAILY_VARS,
    OPEN_METEO_HISTORICAL,
    UNIT_PARAMS,
)
from agro_advisor.services.http import session


def fetch_historical_daily(
    start_date: str,
    end_date: str,
    lat: float,
    lon: float,
    timezone: str = "auto",
) -> dict[str, Any]:
    """
    Fetch historical daily weather from Open-Meteo Archive API.

    Args:
        start_date: ISO date string (YYYY-MM-DD), e.g. the biofix date.
        end_date: ISO date string (YYYY-MM-DD).
        lat: Latitude.
        lon: Longitude.
        timezone: IANA timezone for day boundaries.

    Returns:
        Raw API response dict with ``daily`` key containing arrays.
    """
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "start_date": start_date,
        "end_date": end_date,
        "daily": DAILY_VARS,
        "timezone": timezone,
        **UNIT_PARAMS,
    }
    resp = session.get(OPEN_METEO_HISTORICAL, params=params)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
