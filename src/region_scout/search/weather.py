"""Historical weather for the same calendar window across past years."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from region_scout.datasources.weather import (
    WeatherWindow,
    fetch_historical_weather,
    roll_date_windows,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from region_scout.datasources.weather import DailyWeather, DateRange

logger = logging.getLogger(__name__)


def collect_historical_weather(
    lat: float,
    lon: float,
    date_range: DateRange,
    years: int = 1,
    reference: date | None = None,
    fetch: Callable[[float, float, DateRange], list[DailyWeather]] = fetch_historical_weather,
) -> list[WeatherWindow]:
    """
    Fetch weather for ``date_range``'s calendar window in each of the last ``years`` years.

    Args:
        lat: Latitude.
        lon: Longitude.
        date_range: Window of interest (month/day and length are used).
        years: Number of past windows (at least one).
        reference: Windows end before this date (default: today).
        fetch: Per-window fetch function.

    Returns:
        One WeatherWindow per past window, most recent first. A window whose
        fetch failed has no days.
    """
    windows = roll_date_windows(date_range, reference or date.today(), years)
    results = []
    for window in windows:
        days = fetch(lat, lon, window)
        if not days:
            logger.warning("No historical weather for %s..%s", window.start, window.end)
        results.append(WeatherWindow(date_range=window, days=days))
    return results
