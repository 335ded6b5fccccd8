"""Overpass API data source.

Public API:
  - client: OverpassClient (POST a query, get raw JSON text back)
  - queries: compose_regions_query, compose_city_query_by_name,
    compose_city_query_by_position, compose_detail_query
  - parse: extract_relation_ids, extract_nodes
  - models: OsmNode
"""

from region_scout.datasources.overpass.client import OVERPASS_API, OverpassClient
from region_scout.datasources.overpass.models import OsmNode
from region_scout.datasources.overpass.parse import extract_nodes, extract_relation_ids
from region_scout.datasources.overpass.queries import (
    REGION_FEATURES,
    compose_city_query_by_name,
    compose_city_query_by_position,
    compose_detail_query,
    compose_regions_query,
)

__all__ = [
    "OVERPASS_API",
    "REGION_FEATURES",
    "OsmNode",
    "OverpassClient",
    "compose_city_query_by_name",
    "compose_city_query_by_position",
    "compose_detail_query",
    "compose_regions_query",
    "extract_nodes",
    "extract_relation_ids",
]
