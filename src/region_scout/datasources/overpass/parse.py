"""Overpass JSON response parsing.

Malformed input never raises: an unparsable body, a non-object document or a
missing ``elements`` list all give an empty result, the same as an area with
nothing in it. Single elements that do not fit are skipped: relations without
an integer id, and nodes without numeric ``lat``/``lon`` (they are dropped
rather than placed at 0,0).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from region_scout.datasources.overpass.models import OsmNode

logger = logging.getLogger(__name__)


def _elements(raw: str) -> list[dict[str, Any]]:
    """Return the ``elements`` array of an Overpass response, or []."""
    if not raw:
        return []
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Overpass response is not valid JSON: %s", exc)
        return []
    if not isinstance(document, dict):
        logger.warning("Overpass response is not a JSON object")
        return []
    elements = document.get("elements")
    if not isinstance(elements, list):
        logger.debug("Overpass response has no elements array")
        return []
    return [e for e in elements if isinstance(e, dict)]


def extract_relation_ids(raw: str) -> list[int]:
    """
    Collect relation ids from an Overpass response.

    Args:
        raw: Response body text.

    Returns:
        Ids of ``relation`` elements in element order. A relation listed
        more than once is collapsed to its first occurrence.
    """
    ids: dict[int, None] = {}
    for element in _elements(raw):
        if element.get("type") != "relation":
            continue
        osm_id = element.get("id")
        if isinstance(osm_id, int) and not isinstance(osm_id, bool):
            ids.setdefault(osm_id, None)
    return list(ids)


def extract_nodes(raw: str) -> list[OsmNode]:
    """Collect ``node`` elements with their tags copied verbatim."""
    nodes: list[OsmNode] = []
    for element in _elements(raw):
        if element.get("type") != "node":
            continue
        lat, lon = element.get("lat"), element.get("lon")
        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            logger.debug("Skipping node %s without coordinates", element.get("id"))
            continue
        tags = element.get("tags")
        node_tags = {str(k): str(v) for k, v in tags.items()} if isinstance(tags, dict) else {}
        nodes.append(OsmNode(lat=float(lat), lon=float(lon), tags=node_tags))
    return nodes
