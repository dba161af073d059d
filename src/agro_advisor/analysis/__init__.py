"""Decision logic over normalized weather and static reference tables.

Dependency rule: analysis/ imports datasource *models* and reference tables
only. It never fetches data, never touches the store, and keeps no state
between calls, so every function here is safe to call concurrently.

Modules:
  - phenology: accumulated GDD + pest model -> current/next stage, statuses
  - suitability: one WeatherDay + application mode -> SuitabilityAssessment
  - serialization: JSON dicts with explicit units for both

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function taking models and
   returning a frozen dataclass.
2. Add a ``*_to_dict`` helper in ``serialization.py``.
3. Wire it into ``flows/advise.py`` and add ``tests/test_{name}.py``.
"""

from agro_advisor.analysis.phenology import (
    StageResolution,
    resolve_stage,
    season_products,
    stage_contains,
    stage_status,
)
from agro_advisor.analysis.serialization import (
    assessment_to_dict,
    stage_resolution_to_dict,
    stage_to_dict,
)
from agro_advisor.analysis.suitability import (
    FactorAssessment,
    SuitabilityAssessment,
    classify,
    evaluate,
    overall_condition,
)

__all__ = [
    "FactorAssessment",
    "StageResolution",
    "SuitabilityAssessment",
    "assessment_to_dict",
    "classify",
    "evaluate",
    "overall_condition",
    "resolve_stage",
    "season_products",
    "stage_contains",
    "stage_resolution_to_dict",
    "stage_status",
    "stage_to_dict",
]
