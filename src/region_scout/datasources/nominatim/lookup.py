"""Relation id -> PlaceInfo lookups via Nominatim ``/lookup``."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from region_scout.schemas import PlaceInfo

if TYPE_CHECKING:
    from region_scout.datasources.nominatim.client import NominatimClient

logger = logging.getLogger(__name__)

# Nominatim rejects lookups with more than 50 ids.
MAX_IDS_PER_LOOKUP = 50

#: Nominatim ``addresstype``/``type`` values counted as cities.
CITY_TYPES = frozenset({"city", "town", "village", "municipality"})


class Match(StrEnum):
    """How many city candidates to keep."""

    ANY = "any"  # every city-class result
    BEST = "best"  # only the most specific one (highest place_rank)


def _batches(ids: Sequence[int], size: int = MAX_IDS_PER_LOOKUP) -> Iterable[Sequence[int]]:
    for start in range(0, len(ids), size):
        yield ids[start : start + size]


def _lookup_raw(client: NominatimClient, ids: Sequence[int]) -> list[dict[str, Any]]:
    """Fetch raw lookup records for relation ``ids``; failures give []."""
    records: list[dict[str, Any]] = []
    for batch in _batches(ids):
        body = client.get(
            "lookup",
            {"osm_ids": ",".join(f"R{i}" for i in batch), "addressdetails": 1},
        )
        if not body:
            continue
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            logger.warning("Nominatim response is not valid JSON: %s", exc)
            continue
        if not isinstance(payload, list):
            logger.warning("Nominatim lookup returned %s, expected a list", type(payload).__name__)
            continue
        records.extend(r for r in payload if isinstance(r, dict))
    return records


def _to_place(record: dict[str, Any]) -> PlaceInfo | None:
    try:
        osm_id = int(record["osm_id"])
        lat = float(record["lat"])
        lon = float(record["lon"])
    except (KeyError, TypeError, ValueError):
        return None
    address = record.get("address")
    if not isinstance(address, dict):
        address = {}
    name = record.get("name") or str(record.get("display_name") or "").split(",")[0]
    country = address.get("country")
    try:
        return PlaceInfo(
            osm_id=osm_id,
            name=str(name),
            country="" if country is None else str(country),
            latitude=lat,
            longitude=lon,
        )
    except ValidationError as exc:
        logger.warning("Dropping malformed Nominatim record %s: %s", osm_id, exc)
        return None


def _resolved(records: list[dict[str, Any]], ids: Sequence[int]) -> list[tuple[dict[str, Any], PlaceInfo]]:
    """Pair records with their PlaceInfo, keeping only requested relations."""
    wanted = set(ids)
    pairs = []
    for record in records:
        if record.get("osm_type") != "relation":
            continue
        place = _to_place(record)
        if place is None or place.osm_id not in wanted:
            continue
        pairs.append((record, place))
    return pairs


def lookup_relations(client: NominatimClient, ids: Sequence[int]) -> list[PlaceInfo]:
    """
    Resolve relation ids to places.

    Args:
        client: Nominatim transport.
        ids: OSM relation ids.

    Returns:
        Places for the ids Nominatim knows about. Unknown ids are absent.
    """
    if not ids:
        return []
    return [place for _, place in _resolved(_lookup_raw(client, ids), ids)]


def _place_rank(record: dict[str, Any]) -> int:
    try:
        return int(record.get("place_rank") or 0)
    except (TypeError, ValueError):
        return 0


def _is_city(record: dict[str, Any]) -> bool:
    return record.get("addresstype") in CITY_TYPES or record.get("type") in CITY_TYPES


def lookup_cities(client: NominatimClient, ids: Sequence[int], match: Match = Match.ANY) -> list[PlaceInfo]:
    """Resolve relation ids, keeping only city-class places."""
    if not ids:
        return []
    cities = [(r, p) for r, p in _resolved(_lookup_raw(client, ids), ids) if _is_city(r)]
    if match is Match.BEST and cities:
        # max() keeps the first of equally ranked candidates
        best = max(cities, key=lambda pair: _place_rank(pair[0]))
        cities = [best]
    return [place for _, place in cities]
