"""Canonical daily weather record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True)
class WeatherDay:
    """One calendar day of observations, as produced by the normalizer.

    Units: temperatures in °C, rainfall in mm, wind speed in m/s, humidity
    in percent. Any measurement may be ``None`` when the provider did not
    report a usable number.
    """

    date: date
    max_temp: float | None = None
    min_temp: float | None = None
    rainfall_mm: float | None = None
    wind_speed: float | None = None
    humidity_pct: float | None = None

    @property
    def mean_temp(self) -> float | None:
        """Mean of max and min temperature, or None if either is missing."""
        if self.max_temp is None or self.min_temp is None:
            return None
        return (self.max_temp + self.min_temp) / 2
