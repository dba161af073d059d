"""Pest and disease phenology models.

Each model lists its developmental stages as contiguous cumulative-GDD ranges
counted from the biofix date. Tables are validated when loaded, so a gap or
overlap between stages fails at startup rather than at resolution time.

Custom tables can be supplied as JSON with the same shape as
``_PEST_TABLE`` (optionally wrapped as ``{"version": ..., "models": {...}}``)
and loaded with ``load_pest_models_file``.
"""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from agro_advisor.errors import PestModelNotFoundError, StageTableError
from agro_advisor.schemas import PestDiseaseModel

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

PEST_TABLE_VERSION = "2024.2"

_PEST_TABLE: dict[str, dict[str, Any]] = {
    "ascospore": {
        "name": "Apple scab ascospore release (Venturia inaequalis)",
        "base_temp": 0.0,
        "stages": [
            {
                "title": "Pseudothecia development",
                "min": 0,
                "max": 150,
                "base_temp": 0.0,
                "upper_temp": 30.0,
                "desc": "Ascospores are forming in overwintered leaf litter; none are mature yet.",
                "recommended_products": ["Trichoderma soil inoculant"],
                "reasoning": "Treating leaf litter early reduces the inoculum available in spring.",
            },
            {
                "title": "First mature ascospores",
                "min": 150,
                "max": 300,
                "base_temp": 0.0,
                "upper_temp": 30.0,
                "desc": "The first ascospores are mature and discharge during rain events.",
                "recommended_products": ["Bacillus subtilis biofungicide"],
                "reasoning": "Protect new green tissue before the first infection periods.",
            },
            {
                "title": "Peak ascospore release",
                "min": 300,
                "max": 700,
                "base_temp": 0.0,
                "upper_temp": 30.0,
                "desc": "Most ascospores are released; every wetting event is a high infection risk.",
                "recommended_products": [
                    "Bacillus subtilis biofungicide",
                    "Potassium silicate foliar",
                ],
                "reasoning": "Keep foliage protected ahead of forecast rain during peak release.",
            },
            {
                "title": "Release tapering",
                "min": 700,
                "max": 1000,
                "base_temp": 0.0,
                "upper_temp": 30.0,
                "desc": "The remaining ascospore supply is small and declining.",
                "recommended_products": ["Potassium silicate foliar"],
                "reasoning": "Maintain leaf defences while primary inoculum runs out.",
            },
            {
                "title": "Primary season complete",
                "min": 1000,
                "max": 1500,
                "base_temp": 0.0,
                "upper_temp": 30.0,
                "desc": "Ascospores are exhausted; only secondary (conidial) spread remains.",
                "recommended_products": ["Fish hydrolysate microbial food"],
                "reasoning": "Feed the leaf microbiome to suppress secondary infections.",
            },
        ],
    },
    "codling_moth": {
        "name": "Codling moth (Cydia pomonella)",
        "base_temp": 10.0,
        "stages": [
            {
                "title": "Adult flight begins",
                "min": 0,
                "max": 100,
                "base_temp": 10.0,
                "upper_temp": 31.0,
                "desc": "Overwintered moths are emerging and mating.",
                "recommended_products": ["Pheromone mating disruption"],
                "reasoning": "Disruption works best when in place before sustained flight.",
            },
            {
                "title": "Egg laying",
                "min": 100,
                "max": 220,
                "base_temp": 10.0,
                "upper_temp": 31.0,
                "desc": "Females lay eggs on leaves and fruitlets.",
                "recommended_products": ["Kaolin clay particle film"],
                "reasoning": "A particle film deters egg laying on fruit surfaces.",
            },
            {
                "title": "First egg hatch",
                "min": 220,
                "max": 500,
                "base_temp": 10.0,
                "upper_temp": 31.0,
                "desc": "Larvae hatch and search for fruit to enter.",
                "recommended_products": [
                    "Codling moth granulovirus (CpGV)",
                    "Bacillus thuringiensis (Bt)",
                ],
                "reasoning": "Larvae are only exposed between hatch and fruit entry.",
            },
            {
                "title": "Peak first-generation hatch",
                "min": 500,
                "max": 700,
                "base_temp": 10.0,
                "upper_temp": 31.0,
                "desc": "Hatch is at its highest; fruit damage appears.",
                "recommended_products": ["Codling moth granulovirus (CpGV)"],
                "reasoning": "Short-lived virus sprays need repeating through peak hatch.",
            },
            {
                "title": "Second-generation flight",
                "min": 700,
                "max": 1200,
                "base_temp": 10.0,
                "upper_temp": 31.0,
                "desc": "First-generation adults emerge and a second cycle begins.",
                "recommended_products": ["Pheromone mating disruption", "Beauveria bassiana"],
                "reasoning": "Renew disruption dispensers and target the second hatch.",
            },
        ],
    },
    "fall_armyworm": {
        "name": "Fall armyworm (Spodoptera frugiperda)",
        "base_temp": 11.0,
        "stages": [
            {
                "title": "Egg",
                "min": 0,
                "max": 45,
                "base_temp": 11.0,
                "upper_temp": 34.0,
                "desc": "Egg masses are on the underside of leaves.",
                "recommended_products": [],
                "reasoning": "Scout for egg masses to time the first larval treatment.",
            },
            {
                "title": "Larva (early instars)",
                "min": 45,
                "max": 200,
                "base_temp": 11.0,
                "upper_temp": 34.0,
                "desc": "Small larvae feed on leaf surfaces, leaving windowpane damage.",
                "recommended_products": ["Bacillus thuringiensis (Bt)", "Beauveria bassiana"],
                "reasoning": "Early instars are the most susceptible to biological controls.",
            },
            {
                "title": "Larva (late instars)",
                "min": 200,
                "max": 400,
                "base_temp": 11.0,
                "upper_temp": 34.0,
                "desc": "Large larvae bore into whorls and cause ragged feeding damage.",
                "recommended_products": ["Metarhizium anisopliae"],
                "reasoning": "Late instars shelter in whorls; direct sprays into the whorl.",
            },
            {
                "title": "Pupa",
                "min": 400,
                "max": 560,
                "base_temp": 11.0,
                "upper_temp": 34.0,
                "desc": "Larvae drop to the soil to pupate.",
                "recommended_products": ["Entomopathogenic nematodes"],
                "reasoning": "Soil-applied nematodes reach pupae below the surface.",
            },
            {
                "title": "Adult emergence",
                "min": 560,
                "max": 650,
                "base_temp": 11.0,
                "upper_temp": 34.0,
                "desc": "Moths emerge and disperse to lay the next generation.",
                "recommended_products": ["Pheromone monitoring traps"],
                "reasoning": "Trap catches confirm the start of the next generation.",
            },
        ],
    },
}


def load_pest_models(raw: Mapping[str, Any]) -> Mapping[str, PestDiseaseModel]:
    """Validate a raw pest table and return an immutable registry.

    Args:
        raw: Mapping of pest id -> model dict (``name``, ``base_temp``,
            ``stages``).

    Returns:
        Read-only mapping of pest id -> PestDiseaseModel.

    Raises:
        StageTableError: If any model fails validation (empty, unordered,
            overlapping or gapped stages, or ``min > max``).
    """
    models: dict[str, PestDiseaseModel] = {}
    for pest_id, entry in raw.items():
        try:
            models[pest_id] = PestDiseaseModel.model_validate(entry)
        except ValidationError as exc:
            msg = f"Invalid stage table for {pest_id!r}: {exc}"
            raise StageTableError(msg) from exc
    logger.debug("Loaded %d pest models", len(models))
    return MappingProxyType(models)


def load_pest_models_file(path: Path) -> Mapping[str, PestDiseaseModel]:
    """Load and validate a pest table from a JSON file.

    Raises:
        StageTableError: If the file is not valid JSON or fails validation.
    """
    with path.open() as f:
        try:
            raw: dict[str, Any] = json.load(f)
        except json.JSONDecodeError as exc:
            msg = f"Pest table {path} is not valid JSON: {exc}"
            raise StageTableError(msg) from exc
    if "models" in raw:
        logger.info("Loading pest table %s (version %s)", path, raw.get("version", "unversioned"))
        raw = raw["models"]
    return load_pest_models(raw)


PEST_MODELS: Mapping[str, PestDiseaseModel] = load_pest_models(_PEST_TABLE)


def get_pest_model(
    pest_id: str,
    models: Mapping[str, PestDiseaseModel] | None = None,
) -> PestDiseaseModel:
    """Look up a pest/disease model by identifier.

    Args:
        pest_id: Registry key (e.g. ``"codling_moth"``).
        models: Registry to search (defaults to the embedded table).

    Raises:
        PestModelNotFoundError: If the identifier is unknown.
    """
    registry = PEST_MODELS if models is None else models
    try:
        return registry[pest_id]
    except KeyError:
        raise PestModelNotFoundError(pest_id, list(registry)) from None
