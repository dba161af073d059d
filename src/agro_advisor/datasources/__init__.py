"""External data source integrations.

Each subdirectory is one data source:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs and constants (network sources only)
    ├── models.py         # Dataclasses for normalized records
    └── {feature}.py      # Fetch / compute functions

Sources:
  - weather: Open-Meteo daily weather, normalized to ``WeatherDay``
  - gdd: degree-day accumulation over ``WeatherDay`` sequences
"""
