"""
Tests for the sweep flows.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock, Mock, patch

from region_scout.datasources.weather import DailyWeather, DateRange, WeatherWindow
from region_scout.flows import sweep
from region_scout.schemas import BoundingBox, PlaceInfo, RegionFeature, RegionPreferences
from region_scout.search import RegionSearch

AIRPORTS = RegionPreferences(features=RegionFeature.INTERNATIONAL_AIRPORTS)


def _place(osm_id: int) -> PlaceInfo:
    return PlaceInfo(osm_id=osm_id, name=f"R{osm_id}", latitude=0.0, longitude=0.0)


class TestSweepRegions:
    """Region sweep over tiles with one session."""

    @patch("region_scout.flows.sweep.search_tile")
    def test_one_session_across_tiles(self, mock_task: Mock) -> None:
        mock_task.side_effect = lambda search, bbox, prefs: search.step(bbox, prefs)
        search = Mock(spec=RegionSearch)
        search.processed = frozenset({1, 2})
        search.step.side_effect = [[_place(1)], [], [_place(2)], []]
        engine = Mock()
        engine.start_find_regions.return_value = search

        result = sweep.sweep_regions.fn(
            BoundingBox(south=0, west=0, north=4, east=4), AIRPORTS, tile_deg=2, engine=engine
        )

        engine.start_find_regions.assert_called_once()
        assert search.step.call_count == 4
        assert [p["osm_id"] for p in result] == [1, 2]

    @patch("region_scout.flows.sweep.search_tile")
    def test_tiles_passed_in_order(self, mock_task: Mock) -> None:
        mock_task.return_value = []
        engine = MagicMock()

        sweep.sweep_regions.fn(
            BoundingBox(south=0, west=0, north=1, east=2), AIRPORTS, tile_deg=1, engine=engine
        )

        tiles = [c.args[1] for c in mock_task.call_args_list]
        assert tiles == [
            BoundingBox(south=0, west=0, north=1, east=1),
            BoundingBox(south=0, west=1, north=1, east=2),
        ]


class TestHistoricalWeatherFlow:
    """Serialization of weather windows."""

    def test_serializes_windows(self) -> None:
        engine = Mock()
        engine.get_weather.return_value = [
            WeatherWindow(
                date_range=DateRange(date(2024, 1, 1), date(2024, 1, 2)),
                days=[DailyWeather(date(2024, 1, 1), 4.0, 0.0)],
            )
        ]

        result = sweep.historical_weather.fn(
            45.0, 4.0, date(2023, 1, 1), date(2023, 1, 2), years=1, engine=engine
        )

        assert result == [
            {
                "start": "2024-01-01",
                "end": "2024-01-02",
                "daily": [
                    {
                        "date": "2024-01-01",
                        "temperature_max": 4.0,
                        "temperature_min": 0.0,
                        "temperature_average": 2.0,
                    }
                ],
            }
        ]
        engine.get_weather.assert_called_once_with(
            45.0, 4.0, DateRange(date(2023, 1, 1), date(2023, 1, 2)), 1, None
        )
