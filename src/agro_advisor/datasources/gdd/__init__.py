"""Growing Degree Days (GDD) accumulation.

GDD measures accumulated heat units since a biofix date, the standard
phenological metric for predicting pest and disease development.

Public API:
  - models: DailyGDD, AccumulationResult, DEFAULT_BASE_TEMP_C
  - compute: compute_daily_gdd, accumulate
  - serialization: accumulation_to_dict
"""

from agro_advisor.datasources.gdd.compute import accumulate, compute_daily_gdd
from agro_advisor.datasources.gdd.models import (
    DEFAULT_BASE_TEMP_C,
    AccumulationResult,
    DailyGDD,
)
from agro_advisor.datasources.gdd.serialization import accumulation_to_dict

__all__ = [
    "DEFAULT_BASE_TEMP_C",
    "AccumulationResult",
    "DailyGDD",
    "accumulate",
    "accumulation_to_dict",
    "compute_daily_gdd",
]
