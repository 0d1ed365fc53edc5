"""Tests for the GeoJSON pass-through converter."""

from __future__ import annotations

import json
from typing import Any

import pytest

from geo_convert.converters.geojson import GeoJSONConverter, normalize_geojson
from geo_convert.core.exceptions import GeoJsonParseError, InvalidGeoJsonShapeError


def _convert(document: Any) -> dict[str, Any]:
    return GeoJSONConverter().convert_collection(json.dumps(document).encode()).to_dict()


CANONICAL = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "id": "site-1",
            "geometry": {"type": "Point", "coordinates": [147.15, -9.47, 12.0]},
            "properties": {"name": "Intake", "active": True, "depth": 3.5, "note": None},
        },
        {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]],
            },
            "properties": {"name": "Lease"},
        },
    ],
}


class TestFeatureCollection:
    """FeatureCollections pass through untouched."""

    def test_passthrough_is_idempotent(self) -> None:
        assert _convert(CANONICAL) == CANONICAL

    def test_second_pass_is_identical(self) -> None:
        once = _convert(CANONICAL)
        assert _convert(once) == once

    def test_collection_members_preserved(self) -> None:
        document = {
            "type": "FeatureCollection",
            "name": "sites",
            "crs": {"type": "name", "properties": {"name": "urn:ogc:def:crs:OGC:1.3:CRS84"}},
            "bbox": [0, 0, 1, 1],
            "x-source": "qgis",
            "features": [],
        }
        assert _convert(document) == document

    def test_wrapped_feature_has_no_collection_members(self) -> None:
        feature = {"type": "Feature", "id": 3, "geometry": None, "properties": {}}
        assert _convert(feature) == {"type": "FeatureCollection", "features": [feature]}

    def test_empty_collection(self) -> None:
        assert _convert({"type": "FeatureCollection", "features": []}) == {
            "type": "FeatureCollection",
            "features": [],
        }

    def test_features_must_be_array(self) -> None:
        with pytest.raises(InvalidGeoJsonShapeError, match="must be an array"):
            normalize_geojson({"type": "FeatureCollection", "features": {}})

    def test_feature_entries_must_be_objects(self) -> None:
        with pytest.raises(InvalidGeoJsonShapeError, match="feature 1"):
            normalize_geojson(
                {"type": "FeatureCollection", "features": [CANONICAL["features"][0], 5]}
            )


class TestWrapping:
    """Single features and bare geometries are wrapped."""

    def test_single_feature_wrapped(self) -> None:
        feature = CANONICAL["features"][0]
        result = _convert(feature)
        assert result == {"type": "FeatureCollection", "features": [feature]}

    def test_object_with_geometry_member_wrapped(self) -> None:
        geometry = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}
        result = _convert({"geometry": geometry, "name": "ignored"})
        assert result["features"] == [
            {"type": "Feature", "properties": {}, "geometry": geometry},
        ]

    def test_bare_geometry_wrapped(self) -> None:
        geometry = {"type": "Point", "coordinates": [10.0, 20.0]}
        result = _convert(geometry)
        assert result["features"] == [{"type": "Feature", "properties": {}, "geometry": geometry}]

    def test_malformed_bare_geometry_rejected(self) -> None:
        with pytest.raises(InvalidGeoJsonShapeError, match="Invalid GeoJSON geometry"):
            normalize_geojson({"type": "Polygon", "coordinates": [[[0, 0]]]})


class TestRejection:
    """Anything else fails."""

    @pytest.mark.parametrize(
        "document",
        [
            {"type": "Topology", "objects": {}},
            {"name": "no type"},
            {"geometry": None},
        ],
    )
    def test_unrecognised_object_rejected(self, document: dict[str, Any]) -> None:
        with pytest.raises(InvalidGeoJsonShapeError, match="Invalid GeoJSON format"):
            normalize_geojson(document)

    def test_top_level_array_rejected(self) -> None:
        with pytest.raises(InvalidGeoJsonShapeError, match="not an object"):
            GeoJSONConverter().convert(b"[1, 2, 3]")

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literals_rejected(self, literal: str) -> None:
        raw = f'{{"type": "Point", "coordinates": [{literal}, 0]}}'.encode()
        with pytest.raises(GeoJsonParseError, match="not a valid JSON number"):
            GeoJSONConverter().convert(raw)

    def test_invalid_json_rejected(self) -> None:
        with pytest.raises(GeoJsonParseError, match="Invalid JSON"):
            GeoJSONConverter().convert(b"{'type': 'Feature'")
