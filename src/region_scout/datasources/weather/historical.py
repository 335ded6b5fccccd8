"""Historical daily weather from Open-Meteo Archive API."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

import requests

from region_scout.datasources.weather.client import DAILY_VARS, OPEN_METEO_HISTORICAL
from region_scout.datasources.weather.models import DailyWeather
from region_scout.services.http import session

if TYPE_CHECKING:
    from region_scout.datasources.weather.models import DateRange

logger = logging.getLogger(__name__)


def parse_weather_response(payload: Any) -> list[DailyWeather]:
    """
    Turn an archive response into daily records.

    The ``daily`` block must hold three equally long arrays (``time``,
    ``temperature_2m_max``, ``temperature_2m_min``). Anything else is a
    malformed response: logged, and no data is returned. Days without
    temperatures (archive lag) are skipped.
    """
    daily = payload.get("daily") if isinstance(payload, dict) else None
    if not isinstance(daily, dict):
        logger.error("Historical weather response has no daily block")
        return []

    times = daily.get("time")
    tmax_values = daily.get("temperature_2m_max")
    tmin_values = daily.get("temperature_2m_min")
    if not all(isinstance(v, list) for v in (times, tmax_values, tmin_values)):
        logger.error("Historical weather response is malformed")
        return []
    if not len(times) == len(tmax_values) == len(tmin_values):
        logger.error(
            "Historical weather response is malformed: %d dates, %d max, %d min",
            len(times),
            len(tmax_values),
            len(tmin_values),
        )
        return []

    results: list[DailyWeather] = []
    for date_str, tmax, tmin in zip(times, tmax_values, tmin_values, strict=True):
        if tmax is None or tmin is None:
            logger.debug("No temperatures for %s", date_str)
            continue
        try:
            day = date.fromisoformat(date_str)
            record = DailyWeather(date=day, temperature_max=float(tmax), temperature_min=float(tmin))
        except (TypeError, ValueError):
            logger.error(
                "Historical weather response has invalid day %r (max=%r, min=%r)", date_str, tmax, tmin
            )
            return []
        results.append(record)
    return results


def fetch_historical_weather(
    lat: float,
    lon: float,
    date_range: DateRange,
    *,
    url: str = OPEN_METEO_HISTORICAL,
    http: requests.Session | None = None,
) -> list[DailyWeather]:
    """
    Fetch daily min/max temperatures for ``date_range``.

    Args:
        lat: Latitude.
        lon: Longitude.
        date_range: Inclusive date range.
        url: Archive endpoint (override for self-hosted instances).
        http: Session to use (defaults to the shared retrying session).

    Returns:
        Daily records; empty if the request failed or the response is malformed.
    """
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "start_date": date_range.start.isoformat(),
        "end_date": date_range.end.isoformat(),
        "daily": ",".join(DAILY_VARS),
        "timezone": "auto",
    }
    try:
        resp = (http or session).get(url, params=params)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as exc:
        logger.warning("Historical weather request failed: %s", exc)
        return []
    except ValueError as exc:
        logger.error("Historical weather response is not valid JSON: %s", exc)
        return []
    return parse_weather_response(payload)
