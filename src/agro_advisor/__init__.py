"""Agro Advisor - pest phenology and spray-window decision support.

Architecture::

    datasources/   External APIs and their models (Open-Meteo weather, GDD)
    reference/     Static tables (pest stage tables, application thresholds)
    store.py       Tiered cache with TTL (reference → live → derived)
    analysis/      Decision logic (stage resolution, application suitability)
    flows/         Prefect orchestration (fetch, resolve, assess, save report)
    services/      Shared utilities (HTTP client with retry)

Data flow: datasources → store (cache) → analysis → derived/advice.json

Extension points — see each package's docstring for step-by-step guides:
  - New data source:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New pest model:    reference/pests.py
"""

__version__ = "0.1.0"

from agro_advisor.config import Settings
from agro_advisor.schemas import PestDiseaseModel, PhenologyStage

__all__ = ["PestDiseaseModel", "PhenologyStage", "Settings", "__version__"]
