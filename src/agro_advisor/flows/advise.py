"""
Prefect flow producing a pest-stage and spray-window advice report.

Fetches weather since the biofix date, accumulates GDD, resolves the pest's
current stage, evaluates today's forecast for the chosen application mode,
and writes the combined report to ``derived/advice.json``. Each run
overwrites the previous report, so the latest run always wins.

Run locally:
    python -m agro_advisor.flows.advise
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from prefect import flow, task

from agro_advisor.analysis import (
    assessment_to_dict,
    evaluate,
    resolve_stage,
    season_products,
    stage_resolution_to_dict,
)
from agro_advisor.config import get_settings
from agro_advisor.datasources.gdd import accumulate, accumulation_to_dict
from agro_advisor.datasources.weather import (
    WeatherDay,
    merge_weather_days,
    normalize_open_meteo,
)
from agro_advisor.datasources.weather import forecast as weather_forecast
from agro_advisor.datasources.weather import historical as weather_historical
from agro_advisor.reference import PEST_MODELS, get_pest_model, load_pest_models_file
from agro_advisor.schemas import ApplicationMode
from agro_advisor.store import DataStore

if TYPE_CHECKING:
    from collections.abc import Mapping

    from agro_advisor.analysis import StageResolution, SuitabilityAssessment
    from agro_advisor.datasources.gdd import AccumulationResult
    from agro_advisor.schemas import PestDiseaseModel

store = DataStore(get_settings().data_dir)

# Relative paths within the store
SEASON_WEATHER_PATH = Path("live/season_weather.json")
RECENT_WEATHER_PATH = Path("live/recent_weather.json")
ADVICE_PATH = Path("derived/advice.json")

# Recent days pulled from the forecast API to cover the archive's lag
RECENT_PAST_DAYS = 7


def local_today(timezone: str = "auto") -> date:
    """Today's date in ``timezone`` (the host's date when ``auto``)."""
    if timezone == "auto":
        return date.today()
    return datetime.now(ZoneInfo(timezone)).date()


def load_registry() -> Mapping[str, PestDiseaseModel]:
    """Return the configured pest registry (custom JSON file or embedded)."""
    settings = get_settings()
    if settings.pest_config_path is not None:
        return load_pest_models_file(settings.pest_config_path)
    return PEST_MODELS


@task(name="fetch-season-weather", retries=2, retry_delay_seconds=5)
def fetch_season_weather(
    biofix: date, through: date, lat: float, lon: float, timezone: str = "auto"
) -> dict[str, Any]:
    """Fetch archive weather from biofix through ``through``, using the cache."""
    params = {"lat": lat, "lon": lon, "start": biofix.isoformat(), "end": through.isoformat()}
    if store.is_fresh(SEASON_WEATHER_PATH, **params):
        print("Season weather is fresh, skipping fetch.")
        cached: dict[str, Any] = store.read(SEASON_WEATHER_PATH)
        return cached

    raw = weather_historical.fetch_historical_daily(
        biofix.isoformat(), through.isoformat(), lat, lon, timezone
    )
    store.write(
        SEASON_WEATHER_PATH,
        raw,
        source="open-meteo.com (archive)",
        valid_until=datetime.now(UTC) + timedelta(hours=get_settings().weather_ttl_hours),
        **params,
    )
    return raw


@task(name="fetch-recent-weather", retries=2, retry_delay_seconds=5)
def fetch_recent_weather(lat: float, lon: float, timezone: str = "auto") -> dict[str, Any]:
    """Fetch the last week plus the coming week from the forecast API."""
    params = {"lat": lat, "lon": lon, "day": local_today(timezone).isoformat()}
    if store.is_fresh(RECENT_WEATHER_PATH, **params):
        print("Recent weather is fresh, skipping fetch.")
        cached: dict[str, Any] = store.read(RECENT_WEATHER_PATH)
        return cached

    raw = weather_forecast.fetch_forecast(
        lat, lon, forecast_days=7, past_days=RECENT_PAST_DAYS, timezone=timezone
    )
    store.write(
        RECENT_WEATHER_PATH,
        raw,
        source="open-meteo.com",
        valid_until=datetime.now(UTC) + timedelta(hours=get_settings().weather_ttl_hours),
        **params,
    )
    return raw


@task(name="compute-stage")
def compute_stage(
    days: list[WeatherDay], model: PestDiseaseModel
) -> tuple[AccumulationResult, StageResolution]:
    """Accumulate GDD over the season and resolve the pest stage."""
    accumulation = accumulate(days, model.effective_base_temp)
    resolution = resolve_stage(accumulation.cumulative_total, model)
    return accumulation, resolution


@task(name="assess-application")
def assess_application(day: WeatherDay, mode: ApplicationMode) -> SuitabilityAssessment:
    """Evaluate application suitability for one day."""
    return evaluate(day, mode)


@task(name="save-advice")
def save_advice(report: dict[str, Any], **params: Any) -> Path:
    """Save the advice report via store."""
    return store.write(ADVICE_PATH, report, source="agro-advisor", **params)


def season_days(
    season_raw: dict[str, Any], recent_raw: dict[str, Any], biofix: date, through: date
) -> list[WeatherDay]:
    """Merge archive and recent weather, limited to ``[biofix, through]``."""
    merged = merge_weather_days(normalize_open_meteo(season_raw), normalize_open_meteo(recent_raw))
    return [d for d in merged if biofix <= d.date <= through]


def pick_day(days: list[WeatherDay], target: date) -> WeatherDay:
    """Return the record for ``target``, or an empty record if absent."""
    for day in days:
        if day.date == target:
            return day
    print(f"No weather for {target.isoformat()}; all factors will be Unknown.")
    return WeatherDay(date=target)


@flow(name="advise", log_prints=True)
def advise_flow(
    biofix: date,
    pest_id: str | None = None,
    mode: ApplicationMode = ApplicationMode.FOLIAR,
    lat: float | None = None,
    lon: float | None = None,
    target: date | None = None,
) -> dict[str, Any]:
    """
    Build the advice report for one pest, location, and application mode.

    Args:
        biofix: Date GDD accumulation starts (first observed activity).
        pest_id: Pest registry key (defaults to settings.default_pest).
        mode: Application mode to evaluate.
        lat: Latitude (defaults to settings.lat).
        lon: Longitude (defaults to settings.lon).
        target: Day to evaluate for application (defaults to today in
            settings.timezone).

    Returns:
        Summary dict with the total GDD, stage names, and overall condition.

    Raises:
        PestModelNotFoundError: If ``pest_id`` is not in the registry.
    """
    settings = get_settings()
    pest_id = pest_id or settings.default_pest
    lat = settings.lat if lat is None else lat
    lon = settings.lon if lon is None else lon
    target = target or local_today(settings.timezone)
    through = target - timedelta(days=1)

    model = get_pest_model(pest_id, load_registry())
    print(f"Advising on {model.name} from biofix {biofix.isoformat()} at ({lat}, {lon})")

    if biofix > through:
        # Season starts today or later: nothing has accumulated yet
        print(f"Biofix {biofix.isoformat()} is not before {target.isoformat()}; 0 GDD so far.")
        season_raw: dict[str, Any] = {"daily": {}}
    else:
        season_raw = fetch_season_weather(biofix, through, lat, lon, settings.timezone)
    recent_raw = fetch_recent_weather(lat, lon, settings.timezone)

    days = season_days(season_raw, recent_raw, biofix, through)
    accumulation, resolution = compute_stage(days, model)
    if not accumulation.is_complete:
        print(f"{len(accumulation.incomplete_dates)} day(s) had incomplete temperatures.")

    target_day = pick_day(normalize_open_meteo(recent_raw), target)
    assessment = assess_application(target_day, ApplicationMode(mode))

    report = {
        "pest": {"id": pest_id, "name": model.name},
        "biofix": biofix.isoformat(),
        "location": {"lat": lat, "lon": lon},
        "accumulation": accumulation_to_dict(accumulation),
        "stage": stage_resolution_to_dict(resolution),
        "season_products": list(season_products(model)),
        "suitability": assessment_to_dict(assessment),
    }
    path = save_advice(report, pest=pest_id, biofix=biofix.isoformat())

    print(
        f"{accumulation.cumulative_total:.0f} GDD: {resolution.current.title}; "
        f"{assessment.mode} application is {assessment.overall_condition}"
    )
    return {
        "pest_id": pest_id,
        "cumulative_gdd": round(accumulation.cumulative_total, 1),
        "incomplete_days": len(accumulation.incomplete_dates),
        "current_stage": resolution.current.title,
        "stage_matched": resolution.matched,
        "next_stage": resolution.next.title if resolution.next else None,
        "overall_condition": str(assessment.overall_condition),
        "report_path": str(path),
    }


if __name__ == "__main__":
    advise_flow(biofix=date(local_today(get_settings().timezone).year, 1, 1))
