"""
Domain models for the decision engine.

Enumerations shared by every module plus the pydantic models for the static
configuration tables (pest/disease stage tables and application threshold
guidelines). Configuration models are frozen and validated when loaded, so a
malformed table fails at startup instead of producing inconsistent results.
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

# =============================================================================
# Enumerations
# =============================================================================


class Condition(StrEnum):
    """Suitability tier for a weather factor."""

    OPTIMAL = "Optimal"
    CAUTION = "Caution"
    AVOID = "Avoid"
    UNKNOWN = "Unknown"

    @property
    def severity(self) -> int:
        """Rank used for worst-case aggregation (higher is worse)."""
        return _SEVERITY[self]


_SEVERITY = {
    Condition.OPTIMAL: 0,
    Condition.UNKNOWN: 1,
    Condition.CAUTION: 2,
    Condition.AVOID: 3,
}

# Tier order every threshold guideline must follow
TIER_ORDER = (Condition.OPTIMAL, Condition.CAUTION, Condition.AVOID)


class ApplicationMode(StrEnum):
    """How a product is applied."""

    SOIL = "soil"
    FOLIAR = "foliar"


class Factor(StrEnum):
    """Weather factor evaluated for application suitability."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    WIND = "wind"
    RAINFALL = "rainfall"

    @property
    def label(self) -> str:
        """Display name (e.g. ``"Temperature"``)."""
        return self.value.capitalize()


class StageStatus(StrEnum):
    """Position of a phenology stage relative to the accumulated GDD."""

    COMPLETED = "Completed"
    CURRENT = "Current"
    UPCOMING = "Upcoming"


# =============================================================================
# Pest / disease phenology
# =============================================================================


class PhenologyStage(BaseModel):
    """A developmental period bounded by a cumulative-GDD range.

    Accepts the short field names used by older configuration files
    (``min``, ``max``, ``desc``) as well as the canonical ones.
    """

    model_config = {"frozen": True, "populate_by_name": True, "str_strip_whitespace": True}

    title: str
    min_gdd: float = Field(validation_alias=AliasChoices("min_gdd", "min"))
    max_gdd: float = Field(validation_alias=AliasChoices("max_gdd", "max"))
    base_temp: float = 10.0
    upper_temp: float | None = None
    description: str = Field(default="", validation_alias=AliasChoices("description", "desc"))
    recommended_products: tuple[str, ...] = ()
    reasoning: str = ""

    @model_validator(mode="after")
    def _check_range(self) -> PhenologyStage:
        if self.min_gdd > self.max_gdd:
            msg = f"Stage {self.title!r}: min_gdd {self.min_gdd} exceeds max_gdd {self.max_gdd}"
            raise ValueError(msg)
        return self


class PestDiseaseModel(BaseModel):
    """A pest or disease with its ordered phenology stages.

    Stages must be non-empty, ordered by ``min_gdd``, and contiguous: each
    stage starts where the previous one ends.
    """

    model_config = {"frozen": True, "str_strip_whitespace": True}

    name: str
    base_temp: float | None = None
    stages: tuple[PhenologyStage, ...]

    @field_validator("stages")
    @classmethod
    def _check_stages(cls, stages: tuple[PhenologyStage, ...]) -> tuple[PhenologyStage, ...]:
        if not stages:
            raise ValueError("A pest model needs at least one stage")
        for prev, stage in zip(stages, stages[1:], strict=False):
            if stage.min_gdd < prev.min_gdd:
                msg = f"Stage {stage.title!r} starts before {prev.title!r}"
                raise ValueError(msg)
            if not math.isclose(stage.min_gdd, prev.max_gdd):
                kind = "overlaps" if stage.min_gdd < prev.max_gdd else "leaves a gap after"
                msg = (
                    f"Stage {stage.title!r} ({stage.min_gdd}) {kind} "
                    f"{prev.title!r} (ends at {prev.max_gdd})"
                )
                raise ValueError(msg)
        return stages

    @property
    def effective_base_temp(self) -> float:
        """Base temperature used for accumulation across the whole range."""
        if self.base_temp is not None:
            return self.base_temp
        return self.stages[0].base_temp


# =============================================================================
# Application thresholds
# =============================================================================


class TierRange(BaseModel):
    """Half-open numeric range ``[low, high)``; ``None`` means unbounded."""

    model_config = {"frozen": True}

    low: float | None = None
    high: float | None = None

    @model_validator(mode="after")
    def _check_order(self) -> TierRange:
        if self.low is not None and self.high is not None and self.low >= self.high:
            msg = f"Empty range [{self.low}, {self.high})"
            raise ValueError(msg)
        return self

    def contains(self, value: float) -> bool:
        """Whether ``value`` falls in the range."""
        if self.low is not None and value < self.low:
            return False
        return self.high is None or value < self.high


class ThresholdTier(BaseModel):
    """One tier of a threshold guideline."""

    model_config = {"frozen": True}

    condition: Condition
    threshold: str = Field(..., description="Human-readable range, e.g. '15-25°C'")
    ranges: tuple[TierRange, ...] = Field(..., min_length=1)
    reasoning: str
    recommendations: tuple[str, ...] = ()

    def matches(self, value: float) -> bool:
        """Whether ``value`` falls in any of this tier's ranges."""
        return any(r.contains(value) for r in self.ranges)


class ThresholdGuideline(BaseModel):
    """Ordered Optimal/Caution/Avoid tiers for one (mode, factor) pair.

    Validation guarantees the tiers partition the real line, so every
    finite value classifies into exactly one tier.
    """

    model_config = {"frozen": True}

    mode: ApplicationMode
    factor: Factor
    unit: str
    tiers: tuple[ThresholdTier, ...]

    @model_validator(mode="after")
    def _check_tiers(self) -> ThresholdGuideline:
        conditions = tuple(t.condition for t in self.tiers)
        if conditions != TIER_ORDER:
            msg = f"{self.mode}/{self.factor}: tiers must be {[c.value for c in TIER_ORDER]}"
            raise ValueError(msg)

        ranges = sorted(
            (r for t in self.tiers for r in t.ranges),
            key=lambda r: -math.inf if r.low is None else r.low,
        )
        expected_low: float | None = None
        for i, r in enumerate(ranges):
            if r.low != expected_low:
                msg = f"{self.mode}/{self.factor}: ranges have a gap or overlap at {r.low}"
                raise ValueError(msg)
            if r.high is None and i != len(ranges) - 1:
                msg = f"{self.mode}/{self.factor}: unbounded range must be last"
                raise ValueError(msg)
            expected_low = r.high
        if expected_low is not None:
            msg = f"{self.mode}/{self.factor}: ranges stop at {expected_low}"
            raise ValueError(msg)
        return self

    def tier_for(self, condition: Condition) -> ThresholdTier:
        """Return the tier for a given condition."""
        for tier in self.tiers:
            if tier.condition == condition:
                return tier
        msg = f"{self.mode}/{self.factor} has no {condition} tier"
        raise KeyError(msg)

    @property
    def optimal(self) -> ThresholdTier:
        """The Optimal tier."""
        return self.tiers[0]
