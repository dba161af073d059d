"""Score whether the weather suits a soil or foliar product application.

Each factor relevant to the mode is classified independently against its
threshold guideline. The overall verdict is the worst factor condition, and
only factors whose condition equals that verdict contribute recommendations:
a Caution factor on an Avoid day is explained but adds no advice.

A factor with a missing reading is ``Unknown``. Unknown outranks Optimal, so
a day is never called Optimal on incomplete data, but it never hides a
Caution or Avoid verdict from the factors that were measured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from agro_advisor.datasources.weather.normalize import to_float
from agro_advisor.errors import ThresholdGapError
from agro_advisor.reference.thresholds import MODE_FACTORS, get_guideline
from agro_advisor.schemas import ApplicationMode, Condition, Factor
from agro_advisor.units import CELSIUS, PERCENT, ms_to_kmh

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from agro_advisor.datasources.weather.models import WeatherDay
    from agro_advisor.schemas import ThresholdGuideline, ThresholdTier

logger = logging.getLogger(__name__)

SEVERITY_WORDS = {
    Condition.CAUTION: "a bit outside",
    Condition.AVOID: "well outside",
}


@dataclass(frozen=True)
class FactorAssessment:
    """Classification of one weather factor."""

    factor: Factor
    value: float | None
    unit: str
    condition: Condition
    tier: ThresholdTier | None
    guideline: ThresholdGuideline


@dataclass(frozen=True)
class SuitabilityAssessment:
    """Application suitability for one day and mode."""

    date: date
    mode: ApplicationMode
    factors: tuple[FactorAssessment, ...]
    overall_condition: Condition
    explanation: tuple[str, ...]
    recommendations: tuple[str, ...]

    @property
    def conditions(self) -> dict[Factor, Condition]:
        """Factor -> condition for every evaluated factor."""
        return {fa.factor: fa.condition for fa in self.factors}

    def condition_for(self, factor: Factor) -> Condition:
        """Condition of a single factor."""
        return self.conditions[factor]


def observe(day: WeatherDay, factor: Factor) -> float | None:
    """Extract a factor's value from a day, in the guideline's unit.

    Temperature is the daily mean; wind is converted from m/s to km/h.
    """
    if factor is Factor.TEMPERATURE:
        coerced = replace(day, max_temp=to_float(day.max_temp), min_temp=to_float(day.min_temp))
        return coerced.mean_temp
    if factor is Factor.HUMIDITY:
        return to_float(day.humidity_pct)
    if factor is Factor.WIND:
        speed = to_float(day.wind_speed)
        return None if speed is None else ms_to_kmh(speed)
    return to_float(day.rainfall_mm)


def classify(guideline: ThresholdGuideline, value: float) -> ThresholdTier:
    """Return the tier containing ``value``.

    Raises:
        ThresholdGapError: If no tier matches (a defect in the table).
    """
    for tier in guideline.tiers:
        if tier.matches(value):
            return tier
    msg = f"{guideline.mode}/{guideline.factor}: no tier matches {value!r}"
    raise ThresholdGapError(msg)


def assess_factor(day: WeatherDay, mode: ApplicationMode, factor: Factor) -> FactorAssessment:
    """Classify one factor of a day for an application mode."""
    guideline = get_guideline(mode, factor)
    value = observe(day, factor)
    if value is None:
        logger.warning("%s: no usable %s reading; marking Unknown", day.date, factor)
        return FactorAssessment(factor, None, guideline.unit, Condition.UNKNOWN, None, guideline)

    tier = classify(guideline, value)
    logger.debug("%s %s %s=%.2f -> %s", day.date, mode, factor, value, tier.condition)
    return FactorAssessment(factor, value, guideline.unit, tier.condition, tier, guideline)


def overall_condition(conditions: Iterable[Condition]) -> Condition:
    """Worst condition by severity (Avoid > Caution > Unknown > Optimal)."""
    return max(conditions, key=lambda c: c.severity, default=Condition.OPTIMAL)


def format_value(value: float, unit: str) -> str:
    """Format a reading with its unit (``35.0°C``, ``20.0 km/h``)."""
    sep = "" if unit in (CELSIUS, PERCENT) else " "
    return f"{value:.1f}{sep}{unit}"


def explain(assessments: Iterable[FactorAssessment], mode: ApplicationMode) -> list[str]:
    """Build one sentence per factor that is not Optimal.

    Returns a single all-clear sentence when every factor is Optimal.
    """
    sentences: list[str] = []
    for fa in assessments:
        if fa.condition is Condition.OPTIMAL:
            continue
        if fa.condition is Condition.UNKNOWN or fa.value is None or fa.tier is None:
            sentences.append(
                f"{fa.factor.label} data is unavailable, so suitability for "
                f"{mode} application could not be assessed."
            )
            continue
        sentences.append(
            f"{fa.factor.label} ({format_value(fa.value, fa.unit)}) is "
            f"{SEVERITY_WORDS[fa.condition]} the optimal range "
            f"({fa.guideline.optimal.threshold}) for {mode} application. "
            f"{fa.tier.reasoning}"
        )
    if not sentences:
        sentences.append(
            f"All weather parameters are within optimal ranges for {mode} application."
        )
    return sentences


def evaluate(day: WeatherDay, mode: ApplicationMode) -> SuitabilityAssessment:
    """Evaluate application suitability for one day.

    Args:
        day: Normalized weather for the day.
        mode: Soil or foliar application.

    Returns:
        SuitabilityAssessment with per-factor conditions, the worst-case
        overall condition, an explanation, and recommendations from the
        factors that match the overall condition.
    """
    mode = ApplicationMode(mode)
    factors = tuple(assess_factor(day, mode, f) for f in MODE_FACTORS[mode])
    overall = overall_condition(fa.condition for fa in factors)

    recommendations: list[str] = []
    for fa in factors:
        if fa.condition is overall and fa.tier is not None:
            recommendations.extend(fa.tier.recommendations)

    return SuitabilityAssessment(
        date=day.date,
        mode=mode,
        factors=factors,
        overall_condition=overall,
        explanation=tuple(explain(factors, mode)),
        recommendations=tuple(recommendations),
    )
