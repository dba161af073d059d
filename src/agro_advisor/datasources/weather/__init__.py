"""Open-Meteo weather data source.

Fetches forecast and historical daily weather from Open-Meteo (free, no API
key) and normalizes provider records into the canonical ``WeatherDay``.

Public API:
  - models: WeatherDay
  - normalize: normalize_record, normalize_records, normalize_open_meteo,
               merge_weather_days
  - forecast: fetch_forecast
  - historical: fetch_historical_daily
"""

from agro_advisor.datasources.weather.client import (
    OPEN_METEO_API,
    OPEN_METEO_HISTORICAL,
)
from agro_advisor.datasources.weather.forecast import fetch_forecast
from agro_advisor.datasources.weather.historical import fetch_historical_daily
from agro_advisor.datasources.weather.models import WeatherDay
from agro_advisor.datasources.weather.normalize import (
    merge_weather_days,
    normalize_open_meteo,
    normalize_record,
    normalize_records,
)

__all__ = [
    "OPEN_METEO_API",
    "OPEN_METEO_HISTORICAL",
    "WeatherDay",
    "fetch_forecast",
    "fetch_historical_daily",
    "merge_weather_days",
    "normalize_open_meteo",
    "normalize_record",
    "normalize_records",
]
