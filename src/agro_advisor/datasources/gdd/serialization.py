"""JSON serialization helpers for GDD data structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from agro_advisor.units import CELSIUS, GDD

if TYPE_CHECKING:
    from agro_advisor.datasources.gdd.models import AccumulationResult


def _round(value: float | None, ndigits: int = 1) -> float | None:
    return None if value is None else round(value, ndigits)


def accumulation_to_dict(result: AccumulationResult) -> dict[str, Any]:
    """Serialize an AccumulationResult to a JSON-compatible dict.

    Args:
        result: The accumulation to serialize.

    Returns:
        Dict with units, base temperature, total, and daily entries.
    """
    return {
        "units": {"temperature": CELSIUS, "gdd": GDD},
        "base_temp_c": result.base_temp,
        "cumulative_gdd": round(result.cumulative_total, 1),
        "incomplete_dates": [d.isoformat() for d in result.incomplete_dates],
        "daily": [
            {
                "date": entry.date.isoformat(),
                "max_temp_c": _round(entry.max_temp),
                "min_temp_c": _round(entry.min_temp),
                "gdd": round(entry.gdd, 1),
                "accumulated_gdd": round(entry.accumulated, 1),
                "complete": entry.complete,
            }
            for entry in result.daily
        ],
    }
