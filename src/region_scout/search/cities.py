"""One-shot city lookup by name or by position."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from region_scout.datasources.nominatim import Match, lookup_cities
from region_scout.datasources.overpass import (
    compose_city_query_by_name,
    compose_city_query_by_position,
    compose_detail_query,
    extract_nodes,
    extract_relation_ids,
)
from region_scout.schemas import PlaceFeature, PlaceInfo

if TYPE_CHECKING:
    from region_scout.datasources.nominatim import NominatimClient
    from region_scout.datasources.overpass import OsmNode, OverpassClient

logger = logging.getLogger(__name__)

# Node tags copied onto a place feature besides ``tourism``.
FEATURE_NAME_TAGS = ("name", "name:en")


def node_to_feature(node: OsmNode) -> PlaceFeature | None:
    """Convert a tourism node; nodes without a ``tourism`` tag give None."""
    tourism = node.tags.get("tourism")
    if not tourism:
        return None
    tags = {"tourism": tourism}
    for key in FEATURE_NAME_TAGS:
        if node.tags.get(key):
            tags[key] = node.tags[key]
    return PlaceFeature(latitude=node.lat, longitude=node.lon, tags=tags)


class CityFinder:
    """Finds cities via Overpass candidates filtered by Nominatim.

    Overpass cannot tell a city relation from any other administrative
    relation, so it only supplies candidate ids; Nominatim keeps the ones
    that are cities.
    """

    def __init__(self, overpass: OverpassClient, nominatim: NominatimClient) -> None:
        self.overpass = overpass
        self.nominatim = nominatim

    def find_by_name(self, name: str, include_details: bool = False) -> list[PlaceInfo]:
        """Cities whose administrative relation is named exactly ``name``."""
        relation_ids = extract_relation_ids(self.overpass.query(compose_city_query_by_name(name)))
        return self._resolve(relation_ids, Match.ANY, include_details)

    def find_by_position(self, lat: float, lon: float, include_details: bool = False) -> list[PlaceInfo]:
        """The city containing the point, if any."""
        relation_ids = extract_relation_ids(
            self.overpass.query(compose_city_query_by_position(lat, lon))
        )
        return self._resolve(relation_ids, Match.BEST, include_details)

    def load_details(self, relation_id: int) -> list[PlaceFeature]:
        """Tourism features belonging to relation ``relation_id``."""
        nodes = extract_nodes(self.overpass.query(compose_detail_query(relation_id)))
        return [f for f in (node_to_feature(n) for n in nodes) if f is not None]

    def _resolve(self, relation_ids: list[int], match: Match, include_details: bool) -> list[PlaceInfo]:
        if not relation_ids:
            logger.warning("No cities found in Overpass")
            return []

        cities = lookup_cities(self.nominatim, relation_ids, match)
        if not cities:
            logger.error("Cannot find cities in Nominatim (checked %d relation ids)", len(relation_ids))
            return []
        logger.info(
            "Found %d cities in Nominatim (checked %d relation ids)", len(cities), len(relation_ids)
        )

        if include_details:
            for city in cities:
                city.features = self.load_details(city.osm_id)
        return cities
