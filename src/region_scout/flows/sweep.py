"""
Prefect flows for tile sweeps and historical weather.

A sweep splits a large bounding box into tiles and drives a single region
search session over them, one tile at a time, so each region is reported
once even when it spans several tiles.

Run locally:
    python -m region_scout.flows.sweep
"""

from __future__ import annotations

from datetime import date
from typing import Any

from prefect import flow, task
from prefect.cache_policies import NONE

from region_scout.config import get_settings
from region_scout.datasources.weather import DateRange
from region_scout.schemas import (
    MIN_PEAK_HEIGHT,
    BoundingBox,
    PlaceInfo,
    RegionFeature,
    RegionPreferences,
)
from region_scout.search import RegionSearch, SearchEngine, tile_bounding_box

DEFAULT_TILE_DEG = 2.0


@task(name="search-tile", cache_policy=NONE)
def search_tile(search: RegionSearch, bbox: BoundingBox, prefs: RegionPreferences) -> list[PlaceInfo]:
    """Run one region search step; not retried since it updates session state."""
    return search.step(bbox, prefs)


@flow(name="sweep-regions")
def sweep_regions(
    bbox: BoundingBox,
    prefs: RegionPreferences,
    tile_deg: float = DEFAULT_TILE_DEG,
    engine: SearchEngine | None = None,
) -> list[dict[str, Any]]:
    """
    Search every tile of ``bbox`` in one session.

    Returns:
        Serialized places, each region at most once, in discovery order.
    """
    engine = engine or SearchEngine.from_settings(get_settings())
    search = engine.start_find_regions()
    tiles = tile_bounding_box(bbox, tile_deg)
    print(f"Sweeping {len(tiles)} tiles of {tile_deg} deg...")

    places: list[dict[str, Any]] = []
    for tile in tiles:
        found = search_tile(search, tile, prefs)
        places.extend(p.model_dump() for p in found)

    print(f"Found {len(places)} regions ({len(search.processed)} relation ids checked)")
    return places


@flow(name="historical-weather")
def historical_weather(
    lat: float,
    lon: float,
    start: date,
    end: date,
    years: int = 1,
    reference: date | None = None,
    engine: SearchEngine | None = None,
) -> list[dict[str, Any]]:
    """Fetch the ``start``..``end`` window for each of the last ``years`` years."""
    engine = engine or SearchEngine.from_settings(get_settings())
    windows = engine.get_weather(lat, lon, DateRange(start, end), years, reference)
    return [
        {
            "start": w.date_range.start.isoformat(),
            "end": w.date_range.end.isoformat(),
            "daily": [
                {
                    "date": d.date.isoformat(),
                    "temperature_max": d.temperature_max,
                    "temperature_min": d.temperature_min,
                    "temperature_average": d.temperature_average,
                }
                for d in w.days
            ],
        }
        for w in windows
    ]


if __name__ == "__main__":
    result = sweep_regions(
        BoundingBox(south=45.0, west=5.0, north=48.0, east=11.0),
        RegionPreferences(
            features=RegionFeature.PEAKS | RegionFeature.SALT_LAKES,
            properties={MIN_PEAK_HEIGHT: "3000"},
        ),
    )
    print(f"Flow complete: {len(result)} regions")
