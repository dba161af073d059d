"""GDD data models and constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

# Fallback base temperature when a pest model does not designate one
DEFAULT_BASE_TEMP_C = 10.0


@dataclass(frozen=True)
class DailyGDD:
    """GDD computation result for a single day.

    ``complete`` is False when the day's temperatures were missing or
    non-numeric; such a day contributes 0 GDD.
    """

    date: date
    max_temp: float | None
    min_temp: float | None
    gdd: float
    accumulated: float
    complete: bool = True


@dataclass(frozen=True)
class AccumulationResult:
    """Daily and cumulative GDD over a range of days (e.g. since biofix)."""

    base_temp: float
    daily: tuple[DailyGDD, ...] = field(default_factory=tuple)

    @property
    def daily_gdd(self) -> list[float]:
        """Per-day GDD, same length and order as the input days."""
        return [entry.gdd for entry in self.daily]

    @property
    def cumulative_total(self) -> float:
        """Total GDD over the whole range."""
        return self.daily[-1].accumulated if self.daily else 0.0

    @property
    def incomplete_dates(self) -> list[date]:
        """Dates whose temperatures could not be used."""
        return [entry.date for entry in self.daily if not entry.complete]

    @property
    def is_complete(self) -> bool:
        """True when every day had usable temperatures."""
        return all(entry.complete for entry in self.daily)
