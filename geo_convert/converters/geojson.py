"""GeoJSON converter (native format - pass-through with shape normalisation)."""

from __future__ import annotations

import json
import logging
from typing import Any

from geo_convert.converters.base import BaseConverter
from geo_convert.converters.registry import register_converter
from geo_convert.core.exceptions import GeoJsonParseError, InvalidGeoJsonShapeError
from geo_convert.models.feature import Feature, FeatureCollection, assemble
from geo_convert.models.geometry import GeoJsonGeometry

logger = logging.getLogger("geo_convert.converters.geojson")

GEOMETRY_TYPES = frozenset(
    {
        "Point",
        "MultiPoint",
        "LineString",
        "MultiLineString",
        "Polygon",
        "MultiPolygon",
        "GeometryCollection",
    }
)


@register_converter
class GeoJSONConverter(BaseConverter):
    """Converter for GeoJSON / plain JSON uploads.

    Accepts a FeatureCollection (kept as-is, collection members included),
    a single Feature, or a bare geometry, and normalises all three to a list
    of features.
    """

    format_name = "GeoJSON"
    file_extensions = ("geojson", "json")

    def convert(self, data: bytes) -> list[Feature]:
        return normalize_geojson(_load_document(data))

    def convert_collection(self, data: bytes) -> FeatureCollection:
        document = _load_document(data)
        return assemble(normalize_geojson(document), members=collection_members(document))


def _load_document(data: bytes) -> dict[str, Any]:
    try:
        document = json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        msg = f"Invalid JSON: {exc}"
        raise GeoJsonParseError(msg) from exc

    if not isinstance(document, dict):
        msg = f"Invalid GeoJSON format: top level is {type(document).__name__}, not an object"
        raise InvalidGeoJsonShapeError(msg)
    return document


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not a valid JSON number"
    raise ValueError(msg)


def normalize_geojson(document: dict[str, Any]) -> list[Feature]:
    """Normalise a parsed GeoJSON object to an ordered feature list.

    Raises:
        InvalidGeoJsonShapeError: If the object is none of FeatureCollection,
            Feature, an object with a ``geometry`` member, or a geometry.
    """
    geojson_type = document.get("type")

    if geojson_type == "FeatureCollection":
        raw_features = document.get("features")
        if not isinstance(raw_features, list):
            msg = "Invalid GeoJSON format: FeatureCollection.features must be an array"
            raise InvalidGeoJsonShapeError(msg)
        return [_passthrough_feature(raw, idx) for idx, raw in enumerate(raw_features)]

    if geojson_type == "Feature":
        logger.debug("Wrapping single Feature in FeatureCollection")
        return [_passthrough_feature(document, 0)]

    if isinstance(document.get("geometry"), dict):
        logger.debug("Wrapping object with geometry member as Feature")
        return [Feature(geometry=_checked_geometry(document["geometry"]), properties={})]

    if geojson_type in GEOMETRY_TYPES:
        logger.debug("Wrapping bare %s geometry as Feature", geojson_type)
        return [Feature(geometry=_checked_geometry(document), properties={})]

    msg = f"Invalid GeoJSON format: unrecognised type {geojson_type!r}"
    raise InvalidGeoJsonShapeError(msg)


def collection_members(document: dict[str, Any]) -> dict[str, Any]:
    """Top-level members of a FeatureCollection other than ``type`` and ``features``.

    Wrapped Features and geometries have none.
    """
    if document.get("type") != "FeatureCollection":
        return {}
    return {k: v for k, v in document.items() if k not in ("type", "features")}


def _passthrough_feature(raw: Any, idx: int) -> Feature:
    """Carry a GeoJSON Feature mapping through unchanged."""
    if not isinstance(raw, dict):
        msg = f"Invalid GeoJSON format: feature {idx} is {type(raw).__name__}, not an object"
        raise InvalidGeoJsonShapeError(msg)

    members = {k: v for k, v in raw.items() if k not in ("type", "geometry", "properties")}
    geometry = raw.get("geometry")
    return Feature(
        geometry=GeoJsonGeometry(geometry) if isinstance(geometry, dict) else None,
        properties=raw.get("properties"),
        members=members,
    )


def _checked_geometry(geometry: dict[str, Any]) -> GeoJsonGeometry:
    """Ensure a geometry mapping is constructible before wrapping it.

    Raises:
        InvalidGeoJsonShapeError: If shapely cannot build the geometry.
    """
    from shapely.geometry import shape

    try:
        shape(geometry)
    except Exception as exc:
        msg = f"Invalid GeoJSON geometry: {exc}"
        raise InvalidGeoJsonShapeError(msg) from exc
    return GeoJsonGeometry(geometry)
