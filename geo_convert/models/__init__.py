"""Data models and schemas.

- Geometry variants: Point, LineString, Polygon, GeoJsonGeometry
- Feature / FeatureCollection: the canonical conversion output
- Payloads: request contract and response envelopes
"""

from geo_convert.models.feature import Feature, FeatureCollection, assemble
from geo_convert.models.geometry import (
    GeoJsonGeometry,
    Geometry,
    LineString,
    Point,
    Polygon,
)

__all__ = [
    "Feature",
    "FeatureCollection",
    "GeoJsonGeometry",
    "Geometry",
    "LineString",
    "Point",
    "Polygon",
    "assemble",
]
