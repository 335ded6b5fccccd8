"""Overpass QL query builders.

Region queries find administrative regions (``admin_level=4``) which contain
every requested feature inside a bounding box. Each feature contributes one
block that selects the feature's nodes, maps them to the areas containing
them and stores the matching relations under a named set (``.relA`` etc.).
The final statement intersects the named sets.

Region query layout::

    [out:json][timeout:180];
    <nodes A> -> .nodesA;.nodesA is_in -> .areasA;rel(pivot.areasA)[...] -> .relA;
    <nodes P> -> .nodesP;...                                               -> .relP;
    rel.relA.relP;out tags;
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from region_scout.schemas import (
    MIN_PEAK_HEIGHT,
    BoundingBox,
    RegionFeature,
    RegionPreferences,
)

logger = logging.getLogger(__name__)

REQUEST_HEADER = "[out:json][timeout:180];"
REQUEST_FOOTER = ";out tags;"

# Roughly state/province level: well known by name, smaller than a country.
REGION_TAGS = "[boundary=administrative][admin_level=4]"

# Feature blocks producing ways/relations recurse down into named sets so the
# default set stays clean.

_AIRPORT_NODES = (
    "("
    'nwr["aeroway"="aerodrome"]["aerodrome:type"="international"]({bbox});'
    'nwr["aerodrome"="international"]({bbox});'
    ") -> .outA;"
    ".outA > -> .outA;"
    "node.outA"
)

_PEAK_NODES = (
    'node[natural=peak][name]({bbox})(if: is_number(t["ele"]) && number(t["ele"]) > {height})'
)

_BEACH_NODES = "way[natural=coastline]({bbox}) -> .coastlines;node(around.coastlines:100)[natural=beach]"

# Lakes can span several regions, so only their nodes inside the box count.
_SALT_LAKE_NODES = (
    "wr[natural=water][water=lake][salt=yes][name]({bbox}) -> .outL;"
    ".outL > -> .outL;"
    "node.outL({bbox})"
)


def _airports(bbox: str, _prefs: RegionPreferences) -> str | None:
    return _AIRPORT_NODES.format(bbox=bbox)


def _peaks(bbox: str, prefs: RegionPreferences) -> str | None:
    raw = prefs.properties.get(MIN_PEAK_HEIGHT)
    if raw is None:
        logger.debug("Peaks requested without %s, skipping", MIN_PEAK_HEIGHT)
        return None
    try:
        height = int(float(raw))
    except (ValueError, OverflowError):
        logger.warning("Ignoring peaks: %s=%r is not a number", MIN_PEAK_HEIGHT, raw)
        return None
    return _PEAK_NODES.format(bbox=bbox, height=height)


def _sea_beaches(bbox: str, _prefs: RegionPreferences) -> str | None:
    return _BEACH_NODES.format(bbox=bbox)


def _salt_lakes(bbox: str, _prefs: RegionPreferences) -> str | None:
    return _SALT_LAKE_NODES.format(bbox=bbox)


@dataclass(frozen=True)
class FeatureQuery:
    """One region feature: its flag, node selector builder and set suffix."""

    feature: RegionFeature
    build_nodes: Callable[[str, RegionPreferences], str | None]
    suffix: str

    @property
    def label(self) -> str:
        return f".rel{self.suffix}"

    def block(self, nodes: str) -> str:
        """Map ``nodes`` up to their regions, stored under :attr:`label`."""
        node_set = f".nodes{self.suffix}"
        area_set = f".areas{self.suffix}"
        return (
            f"{nodes} -> {node_set};"
            f"{node_set} is_in -> {area_set};"
            f"rel(pivot{area_set}){REGION_TAGS} -> {self.label};"
        )


#: Emission order is fixed; it only affects set names, not the intersection.
REGION_FEATURES: tuple[FeatureQuery, ...] = (
    FeatureQuery(RegionFeature.INTERNATIONAL_AIRPORTS, _airports, "A"),
    FeatureQuery(RegionFeature.PEAKS, _peaks, "P"),
    FeatureQuery(RegionFeature.SEA_BEACHES, _sea_beaches, "S"),
    FeatureQuery(RegionFeature.SALT_LAKES, _salt_lakes, "L"),
)


def compose_regions_query(bbox: BoundingBox, prefs: RegionPreferences) -> str | None:
    """
    Build the region query for ``bbox``.

    Args:
        bbox: Area to search.
        prefs: Required features and their parameters.

    Returns:
        Overpass QL text, or None when no feature produced a block (nothing
        enabled, or every enabled feature lacks its parameters). No request
        should be sent in that case.
    """
    bbox_text = bbox.as_overpass()
    blocks: list[str] = []
    labels: list[str] = []
    for fq in REGION_FEATURES:
        if not prefs.wants(fq.feature):
            continue
        nodes = fq.build_nodes(bbox_text, prefs)
        if nodes is None:
            continue
        blocks.append(fq.block(nodes))
        labels.append(fq.label)

    if not labels:
        return None

    # Only regions present in every named set survive.
    return REQUEST_HEADER + "".join(blocks) + "rel" + "".join(labels) + REQUEST_FOOTER


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def compose_city_query_by_name(name: str) -> str:
    """Administrative relations named exactly ``name``."""
    return f'[out:json];rel["name"="{_quote(name)}"]["boundary"="administrative"];out ids;'


def compose_city_query_by_position(lat: float, lon: float) -> str:
    """Administrative or city/town/state relations containing the point."""
    return (
        "[out:json];"
        f"is_in({lat},{lon}) -> .areas;"
        "("
        'rel(pivot.areas)["boundary"="administrative"];'
        'rel(pivot.areas)["place"~"^(city|town|state)$"];'
        ");"
        "out ids;"
    )


def compose_detail_query(relation_id: int) -> str:
    """Tourism-tagged nodes that are members of relation ``relation_id``."""
    return f'[out:json];rel({relation_id});node(r)["tourism"];out body;'
