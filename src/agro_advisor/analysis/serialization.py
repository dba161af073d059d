"""JSON serialization for stage resolutions and suitability assessments.

Every numeric field carries its unit, either in the key name (``_gdd``,
``_c``) or in an adjacent ``unit`` field.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from agro_advisor.units import CELSIUS, GDD

if TYPE_CHECKING:
    from agro_advisor.analysis.phenology import StageResolution
    from agro_advisor.analysis.suitability import SuitabilityAssessment
    from agro_advisor.schemas import PhenologyStage


def stage_to_dict(stage: PhenologyStage) -> dict[str, Any]:
    """Serialize a phenology stage."""
    return {
        "title": stage.title,
        "min_gdd": stage.min_gdd,
        "max_gdd": stage.max_gdd,
        "base_temp_c": stage.base_temp,
        "upper_temp_c": stage.upper_temp,
        "description": stage.description,
        "recommended_products": list(stage.recommended_products),
        "reasoning": stage.reasoning,
    }


def stage_resolution_to_dict(resolution: StageResolution) -> dict[str, Any]:
    """Serialize a StageResolution to a JSON-compatible dict.

    Args:
        resolution: Result of ``resolve_stage``.

    Returns:
        Dict with the total, current/next stages, per-stage statuses, and
        the deduplicated product programme for the whole season.
    """
    gdd_to_next = resolution.gdd_to_next
    return {
        "units": {"gdd": GDD, "temperature": CELSIUS},
        "total_gdd": round(resolution.total, 1),
        "matched": resolution.matched,
        "current": stage_to_dict(resolution.current),
        "next": stage_to_dict(resolution.next) if resolution.next else None,
        "gdd_to_next": round(gdd_to_next, 1) if gdd_to_next is not None else None,
        "stages": [
            {
                "title": stage.title,
                "min_gdd": stage.min_gdd,
                "max_gdd": stage.max_gdd,
                "status": str(status),
            }
            for stage, status in resolution.statuses
        ],
        "season_products": list(resolution.season_products),
    }


def assessment_to_dict(assessment: SuitabilityAssessment) -> dict[str, Any]:
    """Serialize a SuitabilityAssessment to a JSON-compatible dict."""
    return {
        "date": assessment.date.isoformat(),
        "mode": str(assessment.mode),
        "overall_condition": str(assessment.overall_condition),
        "factors": [
            {
                "factor": str(fa.factor),
                "value": round(fa.value, 1) if fa.value is not None else None,
                "unit": fa.unit,
                "condition": str(fa.condition),
                "threshold": fa.tier.threshold if fa.tier else None,
                "optimal_range": fa.guideline.optimal.threshold,
            }
            for fa in assessment.factors
        ],
        "explanation": list(assessment.explanation),
        "recommendations": list(assessment.recommendations),
    }
