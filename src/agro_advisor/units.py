"""Unit conversions used by the evaluators.

Weather arrives in provider-native units (wind in m/s) while the application
thresholds are written in km/h. Keep every conversion here so threshold
tuning never has to guess which unit a value is in.
"""

from __future__ import annotations

KMH_PER_MS = 3.6

# Unit labels attached to serialized numeric fields
CELSIUS = "°C"
MILLIMETRES = "mm"
KMH = "km/h"
PERCENT = "%"
GDD = "GDD"


def ms_to_kmh(speed_ms: float) -> float:
    """Convert a speed in metres/second to kilometres/hour."""
    return speed_ms * KMH_PER_MS


def kmh_to_ms(speed_kmh: float) -> float:
    """Convert a speed in kilometres/hour to metres/second."""
    return speed_kmh / KMH_PER_MS
