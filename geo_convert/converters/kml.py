"""KML / KMZ converter.

Collects every Placemark in document order (including those nested
in Folders) and emits one feature per placemark that carries a Polygon,
LineString or Point, checked in that order. Placemarks with none of them
(style or folder-only records) are skipped.

Inner rings and MultiGeometry containers are not extracted.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from geo_convert.converters.base import BaseConverter
from geo_convert.converters.registry import register_converter
from geo_convert.core.constants import KML_MEMBER_SUFFIX
from geo_convert.core.exceptions import NoMarkupMemberInArchiveError
from geo_convert.models.feature import Feature
from geo_convert.models.geometry import Coord, Geometry, LineString, Point, Polygon
from geo_convert.readers.archive import ArchiveReader
from geo_convert.readers.markup import child, find_nodes, first, text_of

logger = logging.getLogger("geo_convert.converters.kml")


@register_converter
class KMLConverter(BaseConverter):
    """Converter for plain KML documents."""

    format_name = "KML"
    file_extensions = ("kml",)

    def convert(self, data: bytes) -> list[Feature]:
        return kml_to_features(data)


@register_converter
class KMZConverter(BaseConverter):
    """Converter for KMZ archives (zipped KML)."""

    format_name = "KMZ"
    file_extensions = ("kmz",)

    def convert(self, data: bytes) -> list[Feature]:
        return kml_to_features(extract_kml_from_kmz(data))


def extract_kml_from_kmz(data: bytes) -> bytes:
    """Return the bytes of the first ``.kml`` member of a KMZ archive.

    Raises:
        ArchiveReadError: If *data* is not a readable ZIP.
        NoMarkupMemberInArchiveError: If the archive holds no ``.kml`` member.
    """
    archive = ArchiveReader(data)
    member = archive.find_first(KML_MEMBER_SUFFIX)
    if member is None:
        msg = "No KML file found in KMZ archive"
        raise NoMarkupMemberInArchiveError(msg)

    logger.debug("Using KMZ member %s", member)
    return archive.read(member)


def kml_to_features(content: bytes) -> list[Feature]:
    """Parse a KML document and convert its placemarks to features.

    Raises:
        MarkupParseError: If the document is not well-formed XML.
    """
    features: list[Feature] = []
    for idx, placemark in enumerate(find_nodes(content, "Placemark")):
        geometry = placemark_geometry(placemark)
        if geometry is None:
            logger.debug("Skipping placemark %d without Polygon/LineString/Point", idx)
            continue
        features.append(
            Feature(
                geometry=geometry,
                properties={
                    "name": text_of(child(placemark, "name")),
                    "description": text_of(child(placemark, "description")),
                },
            )
        )
    return features


def placemark_geometry(placemark: Any) -> Geometry | None:
    """Extract the placemark's geometry; the first present marker wins."""
    polygon = first(placemark, "Polygon")
    if polygon is not None:
        ring_text = text_of(
            first(first(first(polygon, "outerBoundaryIs"), "LinearRing"), "coordinates")
        ) or text_of(first(polygon, "coordinates"))
        ring = parse_coordinates_text(ring_text)
        return Polygon((tuple(ring),)) if ring else None

    line = first(placemark, "LineString")
    if line is not None:
        coords = parse_coordinates_text(text_of(first(line, "coordinates")))
        return LineString(tuple(coords)) if coords else None

    point = first(placemark, "Point")
    if point is not None:
        coords = parse_coordinates_text(text_of(first(point, "coordinates")))
        return Point(coords[0]) if coords else None

    return None


def parse_coordinates_text(text: str) -> list[Coord]:
    """Parse KML coordinate text (``lon,lat[,alt] lon,lat[,alt] ...``) to (lon, lat) tuples.

    Altitude is dropped; tokens with fewer than two finite numeric components
    are skipped.
    """
    coords: list[Coord] = []
    for token in text.split():
        parts = token.split(",")
        if len(parts) < 2:
            continue
        try:
            lon = float(parts[0])
            lat = float(parts[1])
        except ValueError:
            continue
        if math.isfinite(lon) and math.isfinite(lat):
            coords.append((lon, lat))
    return coords
