"""
Incremental region search.

A region search session walks a sequence of bounding boxes (e.g. the tiles of
a map the user pans across) and reports each matching region at most once.
Regions often straddle several boxes, so the session remembers every relation
id it has already handed to Nominatim.

Usage::

    search = RegionSearch(overpass, nominatim)
    for tile in tiles:
        places = search.step(tile, prefs)

A session is not thread-safe; drive it from one thread at a time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from region_scout.datasources.nominatim import lookup_relations
from region_scout.datasources.overpass import compose_regions_query, extract_relation_ids
from region_scout.search.geo import bounding_box_dimensions_km

if TYPE_CHECKING:
    from region_scout.datasources.nominatim import NominatimClient
    from region_scout.datasources.overpass import OverpassClient
    from region_scout.schemas import BoundingBox, PlaceInfo, RegionPreferences

logger = logging.getLogger(__name__)

#: Boxes wider or taller than this are rejected before any request.
MAX_BBOX_SPAN_KM = 2000.0


class RegionSearch:
    """Stateful region search session with per-session deduplication."""

    def __init__(
        self,
        overpass: OverpassClient,
        nominatim: NominatimClient,
        max_span_km: float = MAX_BBOX_SPAN_KM,
    ) -> None:
        self.overpass = overpass
        self.nominatim = nominatim
        self.max_span_km = max_span_km
        self._processed: set[int] = set()

    @property
    def processed(self) -> frozenset[int]:
        """Relation ids already handled by this session."""
        return frozenset(self._processed)

    def is_valid_bbox(self, bbox: BoundingBox) -> bool:
        width_km, height_km = bounding_box_dimensions_km(bbox)
        return width_km <= self.max_span_km and height_km <= self.max_span_km

    def step(self, bbox: BoundingBox, prefs: RegionPreferences) -> list[PlaceInfo]:
        """
        Find regions in ``bbox`` not reported earlier in this session.

        Args:
            bbox: Area to search.
            prefs: Features every returned region must contain.

        Returns:
            Places found in this step only. Empty for an oversized box or
            preferences that compose no query; the log tells those apart
            from "nothing found".
        """
        if not self.is_valid_bbox(bbox):
            logger.error("Bounding box %s exceeds %.0f km, skipping", bbox.as_overpass(), self.max_span_km)
            return []

        query = compose_regions_query(bbox, prefs)
        if query is None:
            logger.info("No region features requested, skipping")
            return []

        relation_ids = extract_relation_ids(self.overpass.query(query))
        unseen = [i for i in relation_ids if i not in self._processed]
        if len(unseen) != len(relation_ids):
            logger.debug("Filtered out %d already processed relation ids", len(relation_ids) - len(unseen))
        if not unseen:
            return []

        places = lookup_relations(self.nominatim, unseen)
        # Unresolved ids are not retried later in the session.
        self._processed.update(unseen)

        if not places:
            logger.error("Cannot find regions in Nominatim (checked %d relation ids)", len(unseen))
            return []
        logger.info("Found %d regions in Nominatim (checked %d relation ids)", len(places), len(unseen))
        return places
