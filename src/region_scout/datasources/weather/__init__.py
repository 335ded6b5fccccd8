"""Open-Meteo historical weather data source.

Fetches past daily temperatures from Open-Meteo (free, no API key).

Public API:
  - windows: roll_date_windows (same calendar window in previous years)
  - historical: fetch_historical_weather, parse_weather_response
  - models: DateRange, DailyWeather, WeatherWindow
  - client: API URL, shared constants
"""

from region_scout.datasources.weather.client import OPEN_METEO_HISTORICAL
from region_scout.datasources.weather.historical import (
    fetch_historical_weather,
    parse_weather_response,
)
from region_scout.datasources.weather.models import DailyWeather, DateRange, WeatherWindow
from region_scout.datasources.weather.windows import roll_date_windows

__all__ = [
    "OPEN_METEO_HISTORICAL",
    "DailyWeather",
    "DateRange",
    "WeatherWindow",
    "fetch_historical_weather",
    "parse_weather_response",
    "roll_date_windows",
]
