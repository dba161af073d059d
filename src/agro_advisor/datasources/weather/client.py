"""Open-Meteo API client constants and shared configuration.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Archive: https://open-meteo.com/en/docs/historical-weather-api
"""

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_HISTORICAL = "https://archive-api.open-meteo.com/v1/archive"

# Daily variables requested from Open-Meteo, in the engine's native units
DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "wind_speed_10m_max",
    "relative_humidity_2m_mean",
]

# Unit parameters sent with every request
UNIT_PARAMS = {
    "temperature_unit": "celsius",
    "precipitation_unit": "mm",
    "wind_speed_unit": "ms",
}
