"""Region Scout - find regions, cities and historical weather windows.

Architecture::

    datasources/   External APIs (Overpass, Nominatim, Open-Meteo archive)
    search/        Cross-datasource logic (city lookup, incremental region search,
                   historical weather windows)
    flows/         Prefect orchestration (tile sweeps, weather windows)
    services/      Shared utilities (HTTP client with retry)

Data flow: query composer → Overpass → relation ids → Nominatim → PlaceInfo records.

Extension points:
  - New region feature:  datasources/overpass/queries.py (``REGION_FEATURES``)
  - New data source:     datasources/__init__.py
"""

__version__ = "0.1.0"

from region_scout.config import Settings
from region_scout.schemas import BoundingBox, PlaceInfo, RegionFeature, RegionPreferences

__all__ = [
    "BoundingBox",
    "PlaceInfo",
    "RegionFeature",
    "RegionPreferences",
    "Settings",
    "__version__",
]
