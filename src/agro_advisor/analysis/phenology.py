"""Resolve the current phenology stage from accumulated GDD.

Boundary convention: each stage owns ``[min_gdd, max_gdd)``, and the last
stage also owns its ``max_gdd``. A total sitting on a shared boundary belongs
to the later stage, and the earlier stage is reported ``Completed``.

When no stage contains the total (negative or NaN totals from bad data, or a
season that has run past the last stage), the first stage is returned with
``matched=False`` instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agro_advisor.schemas import StageStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agro_advisor.schemas import PestDiseaseModel, PhenologyStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageResolution:
    """Stage classification for one accumulated GDD total."""

    total: float
    current: PhenologyStage
    next: PhenologyStage | None
    statuses: tuple[tuple[PhenologyStage, StageStatus], ...]
    matched: bool = True

    def status_of(self, stage: PhenologyStage) -> StageStatus:
        """Return the status of one of the model's stages."""
        for candidate, status in self.statuses:
            if candidate == stage:
                return status
        msg = f"Stage {stage.title!r} is not part of this model"
        raise KeyError(msg)

    @property
    def gdd_to_next(self) -> float | None:
        """GDD still needed to reach the next stage, or None if last."""
        if self.next is None:
            return None
        return max(0.0, self.next.min_gdd - self.total)

    @property
    def season_products(self) -> tuple[str, ...]:
        """Products recommended across all of the model's stages."""
        return _unique_products(stage for stage, _ in self.statuses)


def stage_contains(stage: PhenologyStage, total: float, *, is_last: bool = False) -> bool:
    """Whether ``total`` falls in the stage's owned range."""
    if stage.min_gdd <= total < stage.max_gdd:
        return True
    return is_last and total == stage.max_gdd


def stage_status(stage: PhenologyStage, total: float, *, is_last: bool = False) -> StageStatus:
    """Classify a single stage against an accumulated total."""
    if stage_contains(stage, total, is_last=is_last):
        return StageStatus.CURRENT
    if total >= stage.max_gdd:
        return StageStatus.COMPLETED
    return StageStatus.UPCOMING


def resolve_stage(total: float, model: PestDiseaseModel) -> StageResolution:
    """Find the current stage, the next stage, and every stage's status.

    Args:
        total: Cumulative GDD since biofix.
        model: Pest/disease model with ordered, contiguous stages.

    Returns:
        StageResolution. ``matched`` is False when the first stage was
        returned as a fallback.
    """
    stages = model.stages
    last = len(stages) - 1

    current_index: int | None = None
    for i, stage in enumerate(stages):
        if stage_contains(stage, total, is_last=i == last):
            current_index = i
            break

    matched = current_index is not None
    if current_index is None:
        logger.warning(
            "%s: no stage contains %.1f GDD; falling back to %r",
            model.name,
            total,
            stages[0].title,
        )
        current_index = 0

    statuses: list[tuple[PhenologyStage, StageStatus]] = []
    for i, stage in enumerate(stages):
        if matched and i == current_index:
            status = StageStatus.CURRENT
        elif total >= stage.max_gdd:
            status = StageStatus.COMPLETED
        else:
            status = StageStatus.UPCOMING
        statuses.append((stage, status))

    return StageResolution(
        total=total,
        current=stages[current_index],
        next=stages[current_index + 1] if current_index < last else None,
        statuses=tuple(statuses),
        matched=matched,
    )


def season_products(model: PestDiseaseModel) -> tuple[str, ...]:
    """Every product recommended across the model's stages.

    This is the season's control programme: first-seen order, duplicates
    dropped.
    """
    return _unique_products(model.stages)


def _unique_products(stages: Iterable[PhenologyStage]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(p for stage in stages for p in stage.recommended_products))
