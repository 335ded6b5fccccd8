"""Search engine facade over the Overpass, Nominatim and Open-Meteo clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

from region_scout.datasources.nominatim import NominatimClient
from region_scout.datasources.overpass import OverpassClient
from region_scout.datasources.weather import OPEN_METEO_HISTORICAL, fetch_historical_weather
from region_scout.search.cities import CityFinder
from region_scout.search.regions import RegionSearch
from region_scout.search.weather import collect_historical_weather
from region_scout.services.http import OVERPASS_RETRY, create_session

if TYPE_CHECKING:
    from datetime import date

    import requests

    from region_scout.config import Settings
    from region_scout.datasources.weather import DailyWeather, DateRange, WeatherWindow
    from region_scout.schemas import PlaceInfo


class SearchEngine:
    """Entry point for city, region and weather searches."""

    def __init__(
        self,
        overpass: OverpassClient,
        nominatim: NominatimClient,
        max_bbox_span_km: float | None = None,
        weather_url: str = OPEN_METEO_HISTORICAL,
        weather_http: requests.Session | None = None,
    ) -> None:
        self.overpass = overpass
        self.nominatim = nominatim
        self.max_bbox_span_km = max_bbox_span_km
        self.weather_url = weather_url
        self.weather_http = weather_http
        self.cities = CityFinder(overpass, nominatim)

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchEngine:
        """Build clients from configuration."""
        overpass_http = create_session(
            retry=OVERPASS_RETRY, timeout=settings.http_timeout, user_agent=settings.user_agent
        )
        http = create_session(timeout=settings.http_timeout, user_agent=settings.user_agent)
        return cls(
            OverpassClient(settings.overpass_url, http=overpass_http),
            NominatimClient(settings.nominatim_url, http=http, accept_language=settings.accept_language),
            max_bbox_span_km=settings.max_bbox_span_km,
            weather_url=settings.open_meteo_archive_url,
            weather_http=http,
        )

    def find_cities_by_name(self, name: str, include_details: bool = False) -> list[PlaceInfo]:
        return self.cities.find_by_name(name, include_details)

    def find_cities_by_position(
        self, lat: float, lon: float, include_details: bool = False
    ) -> list[PlaceInfo]:
        return self.cities.find_by_position(lat, lon, include_details)

    def start_find_regions(self) -> RegionSearch:
        """Start a region search session with an empty processed set."""
        if self.max_bbox_span_km is None:
            return RegionSearch(self.overpass, self.nominatim)
        return RegionSearch(self.overpass, self.nominatim, max_span_km=self.max_bbox_span_km)

    def get_weather(
        self,
        lat: float,
        lon: float,
        date_range: DateRange,
        years: int = 1,
        reference: date | None = None,
    ) -> list[WeatherWindow]:
        """Historical weather for ``date_range`` in each of the last ``years`` years."""

        def fetch(lat: float, lon: float, window: DateRange) -> list[DailyWeather]:
            return fetch_historical_weather(lat, lon, window, url=self.weather_url, http=self.weather_http)

        return collect_historical_weather(lat, lon, date_range, years, reference, fetch=fetch)
