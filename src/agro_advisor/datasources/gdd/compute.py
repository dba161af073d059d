"""Pure GDD computation functions (no I/O).

Formula (simple average method):

    GDD_daily = max(0, (T_max + T_min) / 2 - base_temp)

Cold days floor at zero; they never subtract from the running total.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agro_advisor.datasources.gdd.models import (
    DEFAULT_BASE_TEMP_C,
    AccumulationResult,
    DailyGDD,
)
from agro_advisor.datasources.weather.normalize import to_float

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agro_advisor.datasources.weather.models import WeatherDay

logger = logging.getLogger(__name__)


def compute_daily_gdd(
    max_temp: float,
    min_temp: float,
    base_temp: float = DEFAULT_BASE_TEMP_C,
) -> float:
    """Compute GDD for a single day using the simple average method.

    Args:
        max_temp: Daily maximum temperature in °C.
        min_temp: Daily minimum temperature in °C.
        base_temp: Base development temperature in °C.

    Returns:
        Growing degree days for the day (>= 0).
    """
    avg = (max_temp + min_temp) / 2
    return max(0.0, avg - base_temp)


def accumulate(
    days: Sequence[WeatherDay],
    base_temp: float = DEFAULT_BASE_TEMP_C,
) -> AccumulationResult:
    """Compute daily and cumulative GDD over a sequence of days.

    Days are processed in the order given (callers sort by date). A day with
    a missing or non-numeric temperature contributes 0 and is flagged
    incomplete rather than raising.

    Args:
        days: WeatherDays ordered ascending by date.
        base_temp: Base temperature in °C for the whole range.

    Returns:
        AccumulationResult with one DailyGDD per input day.
    """
    entries: list[DailyGDD] = []
    accumulated = 0.0
    for day in days:
        tmax = to_float(day.max_temp)
        tmin = to_float(day.min_temp)
        if tmax is None or tmin is None:
            logger.warning("Incomplete temperatures on %s; counting 0 GDD", day.date)
            gdd = 0.0
            complete = False
        else:
            gdd = compute_daily_gdd(tmax, tmin, base_temp)
            complete = True
        accumulated += gdd
        entries.append(
            DailyGDD(
                date=day.date,
                max_temp=tmax,
                min_temp=tmin,
                gdd=gdd,
                accumulated=accumulated,
                complete=complete,
            )
        )
    return AccumulationResult(base_temp=base_temp, daily=tuple(entries))
