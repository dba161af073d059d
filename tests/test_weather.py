"""Tests for the Open-Meteo weather datasource and record normalization."""

from __future__ import annotations

from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests

from agro_advisor.datasources.weather import (
    OPEN_METEO_API,
    OPEN_METEO_HISTORICAL,
    WeatherDay,
    fetch_forecast,
    fetch_historical_daily,
    merge_weather_days,
    normalize_open_meteo,
    normalize_record,
    normalize_records,
)
from agro_advisor.datasources.weather.normalize import to_float

OPEN_METEO_RESPONSE = {
    "daily": {
        "time": ["2024-10-02", "2024-10-01"],
        "temperature_2m_max": [28.0, 26.5],
        "temperature_2m_min": [17.0, 15.5],
        "precipitation_sum": [0.0, 3.2],
        "wind_speed_10m_max": [2.5, 4.0],
        "relative_humidity_2m_mean": [68, 74],
    }
}


def _mock_response(payload: dict[str, object]) -> Mock:
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    return mock_response


class TestToFloat:
    """Coercion of provider values."""

    def test_numbers(self) -> None:
        assert to_float(3) == 3.0
        assert to_float("4.5") == 4.5

    def test_unusable_values(self) -> None:
        assert to_float(None) is None
        assert to_float("") is None
        assert to_float("n/a") is None
        assert to_float(True) is None
        assert to_float(float("nan")) is None
        assert to_float(float("inf")) is None


class TestNormalizeRecord:
    """Alias resolution for one record."""

    def test_canonical_names(self) -> None:
        day = normalize_record(
            {
                "date": "2024-10-01",
                "max_temp": 26,
                "min_temp": 15,
                "rainfall_mm": 1.2,
                "wind_speed": 3,
                "humidity_pct": 70,
            }
        )
        assert day == WeatherDay(
            date=date(2024, 10, 1),
            max_temp=26.0,
            min_temp=15.0,
            rainfall_mm=1.2,
            wind_speed=3.0,
            humidity_pct=70.0,
        )

    def test_provider_aliases(self) -> None:
        day = normalize_record(
            {
                "Date": "2024-10-01T00:00:00",
                "Temp_air_max": "26.0",
                "Temp_air_min": "15.0",
                "Rain": "0",
                "windSpeed": 3.5,
                "Rel_humidity": 81,
            }
        )
        assert day.date == date(2024, 10, 1)
        assert day.max_temp == 26.0
        assert day.min_temp == 15.0
        assert day.rainfall_mm == 0.0
        assert day.wind_speed == 3.5
        assert day.humidity_pct == 81.0

    def test_alias_priority_skips_nulls(self) -> None:
        day = normalize_record({"date": "2024-10-01", "max_temp": None, "temperature_max": 22})
        assert day.max_temp == 22.0

    def test_non_numeric_becomes_none(self) -> None:
        day = normalize_record({"date": "2024-10-01", "max_temp": "hot", "min_temp": 10})
        assert day.max_temp is None
        assert day.min_temp == 10.0
        assert day.mean_temp is None

    def test_missing_date_raises(self) -> None:
        with pytest.raises(ValueError, match="date"):
            normalize_record({"max_temp": 20})

    def test_date_object_accepted(self) -> None:
        assert normalize_record({"date": date(2024, 10, 1)}).date == date(2024, 10, 1)


class TestNormalizeRecords:
    """Batch normalization."""

    def test_sorted_by_date(self) -> None:
        days = normalize_records(
            [{"date": "2024-10-03"}, {"date": "2024-10-01"}, {"date": "2024-10-02"}]
        )
        assert [d.date.day for d in days] == [1, 2, 3]

    def test_open_meteo_columns(self) -> None:
        days = normalize_open_meteo(OPEN_METEO_RESPONSE)
        assert [d.date for d in days] == [date(2024, 10, 1), date(2024, 10, 2)]
        assert days[0].max_temp == 26.5
        assert days[0].rainfall_mm == 3.2
        assert days[0].wind_speed == 4.0
        assert days[0].humidity_pct == 74.0

    def test_open_meteo_short_column(self) -> None:
        days = normalize_open_meteo(
            {"daily": {"time": ["2024-10-01", "2024-10-02"], "temperature_2m_max": [20.0]}}
        )
        assert days[1].max_temp is None

    def test_open_meteo_empty(self) -> None:
        assert normalize_open_meteo({}) == []


class TestMergeWeatherDays:
    """Archive lag is filled from forecast past days."""

    def test_fills_missing_temperatures(self) -> None:
        archive = [
            WeatherDay(date=date(2024, 10, 1), max_temp=25, min_temp=15),
            WeatherDay(date=date(2024, 10, 2)),
        ]
        recent = [
            WeatherDay(date=date(2024, 10, 1), max_temp=99, min_temp=99),
            WeatherDay(date=date(2024, 10, 2), max_temp=27, min_temp=16),
            WeatherDay(date=date(2024, 10, 3), max_temp=28, min_temp=17),
        ]
        merged = merge_weather_days(archive, recent)
        assert [d.date.day for d in merged] == [1, 2, 3]
        assert merged[0].max_temp == 25
        assert merged[1].max_temp == 27
        assert merged[2].max_temp == 28

    def test_incomplete_fallback_does_not_replace(self) -> None:
        archive = [WeatherDay(date=date(2024, 10, 1), rainfall_mm=2.0)]
        recent = [WeatherDay(date=date(2024, 10, 1), max_temp=20)]
        assert merge_weather_days(archive, recent)[0].rainfall_mm == 2.0


class TestFetchForecast:
    """Forecast API request shape."""

    @patch("agro_advisor.datasources.weather.forecast.session.get")
    def test_fetch_forecast(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response(OPEN_METEO_RESPONSE)

        result = fetch_forecast(-26.5, 152.9, forecast_days=5, past_days=7)

        assert result == OPEN_METEO_RESPONSE
        mock_get.assert_called_once()
        assert mock_get.call_args.args[0] == OPEN_METEO_API
        params = mock_get.call_args.kwargs["params"]
        assert params["latitude"] == -26.5
        assert params["longitude"] == 152.9
        assert params["forecast_days"] == 5
        assert params["past_days"] == 7
        assert params["wind_speed_unit"] == "ms"
        assert "relative_humidity_2m_mean" in params["daily"]


class TestFetchHistorical:
    """Archive API request shape."""

    @patch("agro_advisor.datasources.weather.historical.session.get")
    def test_fetch_historical_daily(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response(OPEN_METEO_RESPONSE)

        fetch_historical_daily("2024-09-01", "2024-10-02", -26.5, 152.9, "Australia/Brisbane")

        assert mock_get.call_args.args[0] == OPEN_METEO_HISTORICAL
        params = mock_get.call_args.kwargs["params"]
        assert params["start_date"] == "2024-09-01"
        assert params["end_date"] == "2024-10-02"
        assert params["timezone"] == "Australia/Brisbane"
        assert params["temperature_unit"] == "celsius"

    @patch("agro_advisor.datasources.weather.historical.session.get")
    def test_http_error_propagates(self, mock_get: Mock) -> None:
        mock_response = _mock_response({})
        mock_response.raise_for_status.side_effect = requests.HTTPError("502")
        mock_get.return_value = mock_response

        with pytest.raises(requests.HTTPError):
            fetch_historical_daily("2024-09-01", "2024-10-02", -26.5, 152.9)
