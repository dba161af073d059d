"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from agro_advisor import __version__
from agro_advisor.analysis import (
    assessment_to_dict,
    evaluate,
    resolve_stage,
    stage_resolution_to_dict,
)
from agro_advisor.config import get_settings
from agro_advisor.datasources.weather import WeatherDay
from agro_advisor.errors import AgroAdvisorError
from agro_advisor.flows.advise import advise_flow, load_registry
from agro_advisor.reference import PEST_TABLE_VERSION, get_pest_model
from agro_advisor.schemas import ApplicationMode

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="agro-advisor",
        description="Pest phenology and spray-window decisions from daily weather",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("pests", help="List available pest/disease models")

    # 'stage' command - resolve a stage for a known GDD total
    stage_parser = subparsers.add_parser("stage", help="Resolve the stage for a GDD total")
    stage_parser.add_argument("--pest", type=str, default=None, help="Pest model id")
    stage_parser.add_argument("--gdd", type=float, required=True, help="Accumulated GDD")
    stage_parser.add_argument("--json", action="store_true", help="Print JSON")

    # 'suitability' command - score manually entered weather
    suit_parser = subparsers.add_parser(
        "suitability", help="Score application suitability for given weather"
    )
    suit_parser.add_argument(
        "--mode",
        type=ApplicationMode,
        choices=list(ApplicationMode),
        default=ApplicationMode.FOLIAR,
    )
    suit_parser.add_argument("--max-temp", type=float, default=None, help="Max temperature (°C)")
    suit_parser.add_argument("--min-temp", type=float, default=None, help="Min temperature (°C)")
    suit_parser.add_argument("--rain", type=float, default=None, help="Rainfall (mm)")
    suit_parser.add_argument("--wind", type=float, default=None, help="Wind speed (m/s)")
    suit_parser.add_argument("--humidity", type=float, default=None, help="Relative humidity (%%)")
    suit_parser.add_argument("--json", action="store_true", help="Print JSON")

    # 'advise' command - run the full flow
    advise_parser = subparsers.add_parser("advise", help="Fetch weather and build advice report")
    advise_parser.add_argument("--pest", type=str, default=None, help="Pest model id")
    advise_parser.add_argument(
        "--biofix", type=date.fromisoformat, required=True, help="Biofix date (YYYY-MM-DD)"
    )
    advise_parser.add_argument(
        "--mode",
        type=ApplicationMode,
        choices=list(ApplicationMode),
        default=ApplicationMode.FOLIAR,
    )
    advise_parser.add_argument("--lat", type=float, default=None)
    advise_parser.add_argument("--lon", type=float, default=None)

    return parser


def configure_logging(debug: bool = False) -> None:
    """Configure root logging from settings (``--debug`` forces DEBUG)."""
    level = logging.DEBUG if debug else get_settings().log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Location: ({settings.lat}, {settings.lon})")
    print(f"Pest table: {settings.pest_config_path or f'embedded v{PEST_TABLE_VERSION}'}")
    return 0


def cmd_pests(_args: argparse.Namespace) -> int:
    """Handle the 'pests' command."""
    try:
        registry = load_registry()
    except AgroAdvisorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for pest_id, model in sorted(registry.items()):
        print(f"{pest_id:<16} {model.name} ({len(model.stages)} stages)")
    return 0


def cmd_stage(args: argparse.Namespace) -> int:
    """Handle the 'stage' command."""
    pest_id = args.pest or get_settings().default_pest
    try:
        model = get_pest_model(pest_id, load_registry())
    except AgroAdvisorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    resolution = resolve_stage(args.gdd, model)
    if args.json:
        print(json.dumps(stage_resolution_to_dict(resolution), indent=2, ensure_ascii=False))
        return 0

    print(f"{model.name}: {args.gdd:.0f} GDD")
    print(f"Current stage: {resolution.current.title}")
    if not resolution.matched:
        print("  (no stage contains this total; showing the first stage)")
    if resolution.next is not None:
        print(f"Next stage: {resolution.next.title} (at {resolution.next.min_gdd:.0f} GDD)")
    for stage, status in resolution.statuses:
        print(f"  [{status:<9}] {stage.title} ({stage.min_gdd:.0f}-{stage.max_gdd:.0f} GDD)")
    if resolution.season_products:
        print(f"Season programme: {', '.join(resolution.season_products)}")
    return 0


def cmd_suitability(args: argparse.Namespace) -> int:
    """Handle the 'suitability' command."""
    day = WeatherDay(
        date=date.today(),
        max_temp=args.max_temp,
        min_temp=args.min_temp,
        rainfall_mm=args.rain,
        wind_speed=args.wind,
        humidity_pct=args.humidity,
    )
    assessment = evaluate(day, args.mode)
    if args.json:
        print(json.dumps(assessment_to_dict(assessment), indent=2, ensure_ascii=False))
        return 0

    print(f"{assessment.mode.capitalize()} application: {assessment.overall_condition}")
    for fa in assessment.factors:
        print(f"  {fa.factor.label:<12} {fa.condition}")
    for sentence in assessment.explanation:
        print(f"- {sentence}")
    if assessment.recommendations:
        print("Recommendations:")
        for rec in assessment.recommendations:
            print(f"  * {rec}")
    return 0


def cmd_advise(args: argparse.Namespace) -> int:
    """Handle the 'advise' command: run the advice flow."""
    try:
        summary = advise_flow(
            biofix=args.biofix,
            pest_id=args.pest,
            mode=args.mode,
            lat=args.lat,
            lon=args.lon,
        )
    except AgroAdvisorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Accumulated GDD: {summary['cumulative_gdd']}")
    print(f"Current stage: {summary['current_stage']}")
    print(f"Application: {summary['overall_condition']}")
    print(f"Report: {summary['report_path']}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()
    configure_logging(args.debug)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "pests": cmd_pests,
        "stage": cmd_stage,
        "suitability": cmd_suitability,
        "advise": cmd_advise,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
