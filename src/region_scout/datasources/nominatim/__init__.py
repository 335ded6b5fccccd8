"""Nominatim geocoding data source.

Resolves OSM relation ids to named places. Overpass can only say "these
relations match"; Nominatim decides which of them are cities.

Public API:
  - client: NominatimClient (GET an endpoint, raw JSON text back)
  - lookup: Match, lookup_relations, lookup_cities
"""

from region_scout.datasources.nominatim.client import NOMINATIM_API, NominatimClient
from region_scout.datasources.nominatim.lookup import (
    CITY_TYPES,
    Match,
    lookup_cities,
    lookup_relations,
)

__all__ = [
    "CITY_TYPES",
    "NOMINATIM_API",
    "Match",
    "NominatimClient",
    "lookup_cities",
    "lookup_relations",
]
