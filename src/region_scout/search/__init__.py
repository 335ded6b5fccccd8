"""Cross-datasource search logic.

Combines Overpass (what matches), Nominatim (what it is called) and
Open-Meteo (what the weather was like).

- cities.py   CityFinder: one-shot city lookup by name or position
- regions.py  RegionSearch: incremental region search with per-session dedup
- weather.py  collect_historical_weather: same window across past years
- engine.py   SearchEngine: wires the clients together
- geo.py      Bounding-box size and tiling helpers
"""

from region_scout.search.cities import CityFinder
from region_scout.search.engine import SearchEngine
from region_scout.search.geo import bounding_box_dimensions_km, tile_bounding_box
from region_scout.search.regions import RegionSearch
from region_scout.search.weather import collect_historical_weather

__all__ = [
    "CityFinder",
    "RegionSearch",
    "SearchEngine",
    "bounding_box_dimensions_km",
    "collect_historical_weather",
    "tile_bounding_box",
]
