"""Weather thresholds for soil and foliar product application.

One guideline per (application mode, factor). Ranges are half-open
``[low, high)``: the lower bound belongs to the tier, the upper bound to the
next one, and the outermost Avoid ranges are open-ended. So 25°C is Caution
for soil (not Optimal) and 15 mm of rain is Avoid (not Caution).

Wind thresholds are in km/h; convert provider m/s with ``units.ms_to_kmh``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from agro_advisor.schemas import (
    ApplicationMode,
    Condition,
    Factor,
    ThresholdGuideline,
    ThresholdTier,
    TierRange,
)
from agro_advisor.units import CELSIUS, KMH, MILLIMETRES, PERCENT

if TYPE_CHECKING:
    from collections.abc import Mapping


def _r(low: float | None, high: float | None) -> TierRange:
    return TierRange(low=low, high=high)


SOIL_TEMPERATURE = ThresholdGuideline(
    mode=ApplicationMode.SOIL,
    factor=Factor.TEMPERATURE,
    unit=CELSIUS,
    tiers=(
        ThresholdTier(
            condition=Condition.OPTIMAL,
            threshold="15-25°C",
            ranges=(_r(15, 25),),
            reasoning="Soil biology is active and roots take up applied products efficiently.",
            recommendations=(
                "Apply soil products as planned.",
                "Water in lightly after application to move product into the root zone.",
            ),
        ),
        ThresholdTier(
            condition=Condition.CAUTION,
            threshold="10-15°C or 25-30°C",
            ranges=(_r(10, 15), _r(25, 30)),
            reasoning="Microbial activity and root uptake slow at the edges of this range.",
            recommendations=(
                "Apply early morning or late afternoon to avoid temperature extremes.",
                "Add a microbial food source to support establishment.",
            ),
        ),
        ThresholdTier(
            condition=Condition.AVOID,
            threshold="<10°C or >30°C",
            ranges=(_r(None, 10), _r(30, None)),
            reasoning="Extreme soil temperatures stress beneficial microbes and cut efficacy.",
            recommendations=(
                "Postpone soil application until temperatures return to 10-30°C.",
                "Watch the forecast for a more suitable window.",
            ),
        ),
    ),
)

SOIL_RAINFALL = ThresholdGuideline(
    mode=ApplicationMode.SOIL,
    factor=Factor.RAINFALL,
    unit=MILLIMETRES,
    tiers=(
        ThresholdTier(
            condition=Condition.OPTIMAL,
            threshold="0-5 mm",
            ranges=(_r(None, 5),),
            reasoning="Light or no rain lets the product settle into the soil without runoff.",
            recommendations=("Proceed with application; light rain will help incorporation.",),
        ),
        ThresholdTier(
            condition=Condition.CAUTION,
            threshold="5-15 mm",
            ranges=(_r(5, 15),),
            reasoning="Moderate rain can move product below the root zone or off target.",
            recommendations=(
                "Avoid low-lying or poorly drained blocks.",
                "Reduce irrigation after application.",
            ),
        ),
        ThresholdTier(
            condition=Condition.AVOID,
            threshold=">15 mm",
            ranges=(_r(15, None),),
            reasoning="Heavy rain causes runoff and leaching of applied products.",
            recommendations=(
                "Delay application until at least 24 hours after heavy rain.",
                "Check the field for waterlogging before rescheduling.",
            ),
        ),
    ),
)

FOLIAR_TEMPERATURE = ThresholdGuideline(
    mode=ApplicationMode.FOLIAR,
    factor=Factor.TEMPERATURE,
    unit=CELSIUS,
    tiers=(
        ThresholdTier(
            condition=Condition.OPTIMAL,
            threshold="18-28°C",
            ranges=(_r(18, 28),),
            reasoning="Stomata are open and uptake through the leaf cuticle is efficient.",
            recommendations=(
                "Spray as planned.",
                "Target mid-morning once dew has dried.",
            ),
        ),
        ThresholdTier(
            condition=Condition.CAUTION,
            threshold="15-18°C or 28-32°C",
            ranges=(_r(15, 18), _r(28, 32)),
            reasoning="Uptake slows when cool and droplets evaporate faster when warm.",
            recommendations=(
                "Spray early morning or late afternoon.",
                "Use a wetting agent to improve leaf coverage.",
            ),
        ),
        ThresholdTier(
            condition=Condition.AVOID,
            threshold="<15°C or >32°C",
            ranges=(_r(None, 15), _r(32, None)),
            reasoning="Heat raises the risk of leaf burn and cold leaves absorb very little.",
            recommendations=(
                "Do not spray; wait for temperatures between 15 and 32°C.",
                "Reschedule to the coolest part of the next suitable day.",
            ),
        ),
    ),
)

FOLIAR_HUMIDITY = ThresholdGuideline(
    mode=ApplicationMode.FOLIAR,
    factor=Factor.HUMIDITY,
    unit=PERCENT,
    tiers=(
        ThresholdTier(
            condition=Condition.OPTIMAL,
            threshold="60-80%",
            ranges=(_r(60, 80),),
            reasoning="Droplets stay wet on the leaf long enough to be absorbed.",
            recommendations=("Spray as planned.",),
        ),
        ThresholdTier(
            condition=Condition.CAUTION,
            threshold="40-60% or 80-90%",
            ranges=(_r(40, 60), _r(80, 90)),
            reasoning="Dry air shortens droplet life; humid air slows drying and favours disease.",
            recommendations=(
                "Increase water volume to slow droplet drying.",
                "Avoid spraying late in the day when humidity climbs.",
            ),
        ),
        ThresholdTier(
            condition=Condition.AVOID,
            threshold="<40% or >90%",
            ranges=(_r(None, 40), _r(90, None)),
            reasoning="Droplets either evaporate before uptake or stay wet long enough to spread disease.",
            recommendations=("Postpone foliar application until humidity is between 40% and 90%.",),
        ),
    ),
)

FOLIAR_WIND = ThresholdGuideline(
    mode=ApplicationMode.FOLIAR,
    factor=Factor.WIND,
    unit=KMH,
    tiers=(
        ThresholdTier(
            condition=Condition.OPTIMAL,
            threshold="0-8 km/h",
            ranges=(_r(None, 8),),
            reasoning="Light wind keeps spray on target.",
            recommendations=("Spray as planned.",),
        ),
        ThresholdTier(
            condition=Condition.CAUTION,
            threshold="8-15 km/h",
            ranges=(_r(8, 15),),
            reasoning="Moderate wind increases drift onto non-target areas.",
            recommendations=(
                "Use coarse-droplet nozzles to reduce drift.",
                "Leave a buffer next to sensitive areas.",
            ),
        ),
        ThresholdTier(
            condition=Condition.AVOID,
            threshold=">15 km/h",
            ranges=(_r(15, None),),
            reasoning="Strong wind causes spray drift and uneven coverage.",
            recommendations=(
                "Do not spray; wait for wind below 15 km/h.",
                "Check the hourly forecast for calmer early-morning conditions.",
            ),
        ),
    ),
)

FOLIAR_RAINFALL = ThresholdGuideline(
    mode=ApplicationMode.FOLIAR,
    factor=Factor.RAINFALL,
    unit=MILLIMETRES,
    tiers=(
        ThresholdTier(
            condition=Condition.OPTIMAL,
            threshold="0-1 mm",
            ranges=(_r(None, 1),),
            reasoning="Dry leaves hold the product until it is absorbed.",
            recommendations=("Spray as planned.",),
        ),
        ThresholdTier(
            condition=Condition.CAUTION,
            threshold="1-3 mm",
            ranges=(_r(1, 3),),
            reasoning="Light rain can wash product off before it is absorbed.",
            recommendations=(
                "Add a sticker adjuvant to improve rainfastness.",
                "Allow at least 4 hours of dry weather after spraying.",
            ),
        ),
        ThresholdTier(
            condition=Condition.AVOID,
            threshold=">3 mm",
            ranges=(_r(3, None),),
            reasoning="Rain washes product off the foliage.",
            recommendations=(
                "Postpone spraying until leaves are dry and no rain is forecast for 6 hours.",
            ),
        ),
    ),
)

# Factors evaluated per mode, in explanation order
MODE_FACTORS: Mapping[ApplicationMode, tuple[Factor, ...]] = MappingProxyType(
    {
        ApplicationMode.SOIL: (Factor.TEMPERATURE, Factor.RAINFALL),
        ApplicationMode.FOLIAR: (
            Factor.TEMPERATURE,
            Factor.HUMIDITY,
            Factor.WIND,
            Factor.RAINFALL,
        ),
    }
)

THRESHOLDS: Mapping[tuple[ApplicationMode, Factor], ThresholdGuideline] = MappingProxyType(
    {
        (g.mode, g.factor): g
        for g in (
            SOIL_TEMPERATURE,
            SOIL_RAINFALL,
            FOLIAR_TEMPERATURE,
            FOLIAR_HUMIDITY,
            FOLIAR_WIND,
            FOLIAR_RAINFALL,
        )
    }
)


def get_guideline(mode: ApplicationMode, factor: Factor) -> ThresholdGuideline:
    """Return the threshold guideline for a mode/factor pair.

    Raises:
        KeyError: If the factor is not evaluated for that mode.
    """
    try:
        return THRESHOLDS[(mode, factor)]
    except KeyError:
        msg = f"No {factor} threshold for {mode} application"
        raise KeyError(msg) from None
