"""
Tests for CLI functionality.

These tests verify the command-line interface logic.
"""

from __future__ import annotations

import argparse
import json
from datetime import date
from io import StringIO
from unittest.mock import patch

import pytest

from agro_advisor.cli import (
    cmd_advise,
    cmd_info,
    cmd_pests,
    cmd_stage,
    cmd_suitability,
    create_parser,
    main,
)
from agro_advisor.errors import PestModelNotFoundError, StageTableError
from agro_advisor.schemas import ApplicationMode


def _suitability_args(**overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {
        "mode": ApplicationMode.FOLIAR,
        "max_temp": 24.0,
        "min_temp": 22.0,
        "rain": 0.0,
        "wind": 1.0,
        "humidity": 70.0,
        "json": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestCreateParser:
    """Tests for create_parser function."""

    def test_creates_parser(self) -> None:
        """Parser is created successfully."""
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.prog == "agro-advisor"

    def test_parser_has_version(self) -> None:
        """Parser has version argument."""
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])

    def test_parser_has_debug_flag(self) -> None:
        """Parser accepts --debug flag."""
        args = create_parser().parse_args(["--debug", "info"])
        assert args.debug is True

    def test_parser_stage_command(self) -> None:
        """Parser accepts stage command with --pest and --gdd."""
        args = create_parser().parse_args(["stage", "--pest", "codling_moth", "--gdd", "260"])
        assert args.command == "stage"
        assert args.pest == "codling_moth"
        assert args.gdd == 260.0

    def test_parser_suitability_mode(self) -> None:
        """Suitability --mode parses into ApplicationMode."""
        args = create_parser().parse_args(["suitability", "--mode", "soil", "--rain", "3"])
        assert args.mode is ApplicationMode.SOIL
        assert args.rain == 3.0
        assert args.humidity is None

    def test_parser_suitability_default_mode(self) -> None:
        args = create_parser().parse_args(["suitability"])
        assert args.mode is ApplicationMode.FOLIAR

    def test_parser_advise_biofix(self) -> None:
        """Advise parses --biofix as a date."""
        args = create_parser().parse_args(["advise", "--biofix", "2024-09-01"])
        assert args.biofix == date(2024, 9, 1)
        assert args.lat is None

    def test_parser_advise_requires_biofix(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["advise"])


class TestCmdInfo:
    """Tests for cmd_info function."""

    def test_prints_app_info(self) -> None:
        """Info command prints application information."""
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_info(argparse.Namespace())
            output = mock_stdout.getvalue()
        assert exit_code == 0
        assert "Application" in output
        assert "Pest table" in output


class TestCmdPests:
    """Tests for cmd_pests function."""

    def test_lists_models(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_pests(argparse.Namespace())
            output = mock_stdout.getvalue()
        assert exit_code == 0
        assert "codling_moth" in output
        assert "fall_armyworm" in output

    def test_broken_table_returns_one(self) -> None:
        with (
            patch("agro_advisor.cli.load_registry", side_effect=StageTableError("bad table")),
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            exit_code = cmd_pests(argparse.Namespace())
            assert "Error: bad table" in mock_stderr.getvalue()
        assert exit_code == 1


class TestCmdStage:
    """Tests for cmd_stage function."""

    def test_prints_stage(self) -> None:
        args = argparse.Namespace(pest="codling_moth", gdd=260.0, json=False)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_stage(args)
            output = mock_stdout.getvalue()
        assert exit_code == 0
        assert "Current stage: First egg hatch" in output
        assert "Next stage: Peak first-generation hatch" in output

    def test_json_output(self) -> None:
        args = argparse.Namespace(pest="codling_moth", gdd=260.0, json=True)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_stage(args)
            data = json.loads(mock_stdout.getvalue())
        assert data["current"]["title"] == "First egg hatch"

    def test_fallback_noted(self) -> None:
        args = argparse.Namespace(pest="codling_moth", gdd=5000.0, json=False)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_stage(args)
            output = mock_stdout.getvalue()
        assert "no stage contains this total" in output

    def test_unknown_pest_returns_one(self) -> None:
        args = argparse.Namespace(pest="aphid", gdd=10.0, json=False)
        with patch("sys.stderr", new=StringIO()) as mock_stderr:
            exit_code = cmd_stage(args)
            assert "Unknown pest/disease model" in mock_stderr.getvalue()
        assert exit_code == 1

    def test_broken_table_returns_one(self) -> None:
        args = argparse.Namespace(pest="codling_moth", gdd=10.0, json=False)
        with (
            patch("agro_advisor.cli.load_registry", side_effect=StageTableError("bad table")),
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            exit_code = cmd_stage(args)
            assert "Error: bad table" in mock_stderr.getvalue()
        assert exit_code == 1

    def test_prints_season_programme(self) -> None:
        args = argparse.Namespace(pest="codling_moth", gdd=260.0, json=False)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_stage(args)
            output = mock_stdout.getvalue()
        assert "Season programme: Pheromone mating disruption, Kaolin clay particle film" in output


class TestCmdSuitability:
    """Tests for cmd_suitability function."""

    def test_optimal_day(self) -> None:
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            exit_code = cmd_suitability(_suitability_args())
            output = mock_stdout.getvalue()
        assert exit_code == 0
        assert "Foliar application: Optimal" in output
        assert "Spray as planned." in output

    def test_json_output(self) -> None:
        args = _suitability_args(json=True, wind=20 / 3.6, max_temp=40.0, min_temp=30.0)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_suitability(args)
            data = json.loads(mock_stdout.getvalue())
        assert data["overall_condition"] == "Avoid"
        assert data["mode"] == "foliar"

    def test_missing_values_are_unknown(self) -> None:
        args = _suitability_args(mode=ApplicationMode.SOIL, rain=None)
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            cmd_suitability(args)
            output = mock_stdout.getvalue()
        assert "Soil application: Unknown" in output


class TestCmdAdvise:
    """Tests for cmd_advise function."""

    def test_runs_flow(self) -> None:
        args = argparse.Namespace(
            pest="codling_moth",
            biofix=date(2024, 9, 1),
            mode=ApplicationMode.FOLIAR,
            lat=None,
            lon=None,
        )
        with patch("agro_advisor.cli.advise_flow") as mock_flow:
            mock_flow.return_value = {
                "cumulative_gdd": 37.0,
                "current_stage": "Adult flight begins",
                "overall_condition": "Optimal",
                "report_path": "data/derived/advice.json",
            }
            with patch("sys.stdout", new=StringIO()) as mock_stdout:
                exit_code = cmd_advise(args)
                output = mock_stdout.getvalue()

        assert exit_code == 0
        mock_flow.assert_called_once_with(
            biofix=date(2024, 9, 1),
            pest_id="codling_moth",
            mode=ApplicationMode.FOLIAR,
            lat=None,
            lon=None,
        )
        assert "Adult flight begins" in output

    def test_unknown_pest_returns_one(self) -> None:
        args = argparse.Namespace(
            pest="aphid", biofix=date(2024, 9, 1), mode=ApplicationMode.SOIL, lat=None, lon=None
        )
        with (
            patch("agro_advisor.cli.advise_flow", side_effect=PestModelNotFoundError("aphid")),
            patch("sys.stderr", new=StringIO()),
        ):
            assert cmd_advise(args) == 1

    def test_broken_table_returns_one(self) -> None:
        args = argparse.Namespace(
            pest="codling_moth",
            biofix=date(2024, 9, 1),
            mode=ApplicationMode.SOIL,
            lat=None,
            lon=None,
        )
        with (
            patch("agro_advisor.cli.advise_flow", side_effect=StageTableError("bad table")),
            patch("sys.stderr", new=StringIO()) as mock_stderr,
        ):
            assert cmd_advise(args) == 1
            assert "bad table" in mock_stderr.getvalue()


class TestMain:
    """Tests for main function."""

    def test_no_command_shows_help(self) -> None:
        """No command shows help and exits 0."""
        with patch("sys.argv", ["agro-advisor"]):
            assert main() == 0

    def test_stage_command_executes(self) -> None:
        with (
            patch("sys.argv", ["agro-advisor", "stage", "--gdd", "10"]),
            patch("agro_advisor.cli.cmd_stage") as mock_cmd,
        ):
            mock_cmd.return_value = 0
            assert main() == 0
            mock_cmd.assert_called_once()

    def test_info_command_executes(self) -> None:
        with (
            patch("sys.argv", ["agro-advisor", "info"]),
            patch("agro_advisor.cli.cmd_info") as mock_cmd,
        ):
            mock_cmd.return_value = 0
            assert main() == 0
            mock_cmd.assert_called_once()

    def test_unknown_command_shows_help(self) -> None:
        """Unknown command shows help and returns 1."""
        with (
            patch("sys.argv", ["agro-advisor", "info"]),
            patch("agro_advisor.cli.create_parser") as mock_parser,
        ):
            mock_parser.return_value.parse_args.return_value = argparse.Namespace(
                command="unknown", debug=False
            )
            assert main() == 1
