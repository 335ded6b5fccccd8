"""Tests for the Overpass datasource: query builders, parsing and transport."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest
import requests

from region_scout.datasources.overpass import (
    OsmNode,
    OverpassClient,
    compose_city_query_by_name,
    compose_city_query_by_position,
    compose_detail_query,
    compose_regions_query,
    extract_nodes,
    extract_relation_ids,
)
from region_scout.schemas import MIN_PEAK_HEIGHT, BoundingBox, RegionFeature, RegionPreferences

BBOX = BoundingBox(south=10, west=10, north=10.5, east=10.5)


def _prefs(features: RegionFeature, **properties: str) -> RegionPreferences:
    return RegionPreferences(features=features, properties=properties)


def _response(*elements: dict) -> str:
    return json.dumps({"version": 0.6, "elements": list(elements)})


# =============================================================================
# compose_regions_query
# =============================================================================


class TestComposeRegionsQuery:
    """Region query assembly from a feature bitmask."""

    def test_no_features_gives_none(self) -> None:
        assert compose_regions_query(BBOX, _prefs(RegionFeature.NONE)) is None

    def test_peaks_without_height_gives_none(self) -> None:
        assert compose_regions_query(BBOX, _prefs(RegionFeature.PEAKS)) is None

    def test_peaks_with_non_numeric_height_gives_none(self) -> None:
        prefs = _prefs(RegionFeature.PEAKS, **{MIN_PEAK_HEIGHT: "high"})
        assert compose_regions_query(BBOX, prefs) is None

    def test_peaks_scenario(self) -> None:
        """Only peaks with minPeakHeight=3000 embeds the elevation filter and bbox."""
        prefs = _prefs(RegionFeature.PEAKS, **{MIN_PEAK_HEIGHT: "3000"})
        query = compose_regions_query(BBOX, prefs)

        assert query is not None
        assert query.startswith("[out:json][timeout:180];")
        assert 'node[natural=peak][name](10,10,10.5,10.5)' in query
        assert 'number(t["ele"]) > 3000' in query
        assert "-> .nodesP;" in query
        assert ".nodesP is_in -> .areasP;" in query
        assert "rel(pivot.areasP)[boundary=administrative][admin_level=4] -> .relP;" in query
        assert query.endswith("rel.relP;out tags;")

    def test_bbox_order_is_south_west_north_east(self) -> None:
        bbox = BoundingBox(south=1.5, west=2, north=3.25, east=4)
        query = compose_regions_query(bbox, _prefs(RegionFeature.SEA_BEACHES))
        assert query is not None
        assert "(1.5,2,3.25,4)" in query

    def test_all_features_intersected_in_fixed_order(self) -> None:
        features = (
            RegionFeature.SALT_LAKES
            | RegionFeature.SEA_BEACHES
            | RegionFeature.PEAKS
            | RegionFeature.INTERNATIONAL_AIRPORTS
        )
        query = compose_regions_query(BBOX, _prefs(features, **{MIN_PEAK_HEIGHT: "1000"}))

        assert query is not None
        assert query.endswith("rel.relA.relP.relS.relL;out tags;")
        positions = [query.index(f"-> .rel{s};") for s in "APSL"]
        assert positions == sorted(positions)

    def test_skipped_feature_not_in_intersection(self) -> None:
        """Peaks without a height are dropped from the intersection too."""
        query = compose_regions_query(
            BBOX, _prefs(RegionFeature.PEAKS | RegionFeature.INTERNATIONAL_AIRPORTS)
        )
        assert query is not None
        assert ".relP" not in query
        assert query.endswith("rel.relA;out tags;")

    def test_airports_recurse_down_to_nodes(self) -> None:
        query = compose_regions_query(BBOX, _prefs(RegionFeature.INTERNATIONAL_AIRPORTS))
        assert query is not None
        assert '["aerodrome:type"="international"](10,10,10.5,10.5)' in query
        assert ".outA > -> .outA;node.outA -> .nodesA;" in query

    def test_salt_lakes_nodes_limited_to_bbox(self) -> None:
        query = compose_regions_query(BBOX, _prefs(RegionFeature.SALT_LAKES))
        assert query is not None
        assert "[salt=yes]" in query
        assert "node.outL(10,10,10.5,10.5) -> .nodesL;" in query
        assert query.endswith("rel.relL;out tags;")

    def test_beaches_near_coastline(self) -> None:
        query = compose_regions_query(BBOX, _prefs(RegionFeature.SEA_BEACHES))
        assert query is not None
        assert "node(around.coastlines:100)[natural=beach] -> .nodesS;" in query


# =============================================================================
# City and detail queries
# =============================================================================


class TestCityQueries:
    """Single-purpose query builders."""

    def test_by_name(self) -> None:
        query = compose_city_query_by_name("Lyon")
        assert query == '[out:json];rel["name"="Lyon"]["boundary"="administrative"];out ids;'

    def test_by_name_escapes_quotes(self) -> None:
        query = compose_city_query_by_name('Bad "name"\\')
        assert '"name"="Bad \\"name\\"\\\\"' in query

    def test_by_position(self) -> None:
        query = compose_city_query_by_position(45.76, 4.84)
        assert "is_in(45.76,4.84) -> .areas;" in query
        assert 'rel(pivot.areas)["boundary"="administrative"];' in query
        assert 'rel(pivot.areas)["place"~"^(city|town|state)$"];' in query
        assert query.endswith("out ids;")

    def test_detail_query(self) -> None:
        assert compose_detail_query(120965) == '[out:json];rel(120965);node(r)["tourism"];out body;'


# =============================================================================
# Parsing
# =============================================================================


class TestExtractRelationIds:
    """Relation id extraction."""

    @pytest.mark.parametrize("raw", ["", "not json", "[1, 2]", '{"elements": 5}', "{}"])
    def test_malformed_gives_empty(self, raw: str) -> None:
        assert extract_relation_ids(raw) == []

    def test_only_non_relations(self) -> None:
        raw = _response({"type": "node", "id": 1}, {"type": "way", "id": 2})
        assert extract_relation_ids(raw) == []

    def test_relations_in_element_order(self) -> None:
        raw = _response(
            {"type": "relation", "id": 30},
            {"type": "node", "id": 1},
            {"type": "relation", "id": 10},
            {"type": "way", "id": 2},
            {"type": "relation", "id": 20},
        )
        assert extract_relation_ids(raw) == [30, 10, 20]

    def test_duplicates_removed(self) -> None:
        raw = _response({"type": "relation", "id": 7}, {"type": "relation", "id": 7})
        assert extract_relation_ids(raw) == [7]

    def test_relation_without_id_skipped(self) -> None:
        raw = _response({"type": "relation"}, {"type": "relation", "id": "x"})
        assert extract_relation_ids(raw) == []


class TestExtractNodes:
    """Node extraction."""

    def test_malformed_gives_empty(self) -> None:
        assert extract_nodes("{") == []

    def test_nodes_with_tags(self) -> None:
        raw = _response(
            {"type": "node", "id": 1, "lat": 45.1, "lon": 4.2, "tags": {"tourism": "museum", "ele": 12}},
            {"type": "relation", "id": 5},
            {"type": "node", "id": 2, "lat": 45, "lon": 4},
        )
        nodes = extract_nodes(raw)

        assert nodes == [
            OsmNode(lat=45.1, lon=4.2, tags={"tourism": "museum", "ele": "12"}),
            OsmNode(lat=45.0, lon=4.0, tags={}),
        ]

    def test_node_without_coordinates_skipped(self) -> None:
        raw = _response({"type": "node", "id": 1, "tags": {"tourism": "hotel"}})
        assert extract_nodes(raw) == []


# =============================================================================
# Transport
# =============================================================================


class TestOverpassClient:
    """POST transport; failures turn into an empty body."""

    def test_posts_query(self) -> None:
        http = Mock()
        http.post.return_value.text = '{"elements": []}'
        client = OverpassClient("https://overpass.test/api/interpreter", http=http)

        assert client.query("[out:json];") == '{"elements": []}'
        http.post.assert_called_once_with(
            "https://overpass.test/api/interpreter", data={"data": "[out:json];"}
        )

    def test_connection_error_gives_empty(self) -> None:
        http = Mock()
        http.post.side_effect = requests.ConnectionError("down")
        assert OverpassClient(http=http).query("x") == ""

    def test_http_error_gives_empty(self) -> None:
        http = Mock()
        response = requests.Response()
        response.status_code = 504
        http.post.return_value.raise_for_status.side_effect = requests.HTTPError(response=response)
        assert OverpassClient(http=http).query("x") == ""
