"""GPX (GPS Exchange Format) converter.

Waypoints become Points; each track segment and each route becomes a
LineString. Latitude and longitude are read from element attributes and
emitted as ``(lon, lat)``.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from geo_convert.converters.base import BaseConverter
from geo_convert.converters.registry import register_converter
from geo_convert.models.feature import Feature
from geo_convert.models.geometry import Coord, LineString, Point
from geo_convert.readers.markup import attribute, child, children, parse_markup, text_of

logger = logging.getLogger("geo_convert.converters.gpx")


@register_converter
class GPXConverter(BaseConverter):
    """Converter for GPX files."""

    format_name = "GPX"
    file_extensions = ("gpx",)

    def convert(self, data: bytes) -> list[Feature]:
        """Convert GPX to features: waypoints, then track segments, then routes.

        Raises:
            MarkupParseError: If the document is not well-formed XML.
        """
        tree = parse_markup(data)
        gpx = tree.get("gpx", tree)

        features: list[Feature] = []

        for wpt in children(gpx, "wpt"):
            coord = point_coord(wpt)
            if coord is None:
                logger.debug("Skipping waypoint without numeric lat/lon")
                continue
            features.append(Feature(geometry=Point(coord), properties={"name": _name(wpt)}))

        for trk in children(gpx, "trk"):
            name = _name(trk)
            for seg_idx, trkseg in enumerate(children(trk, "trkseg")):
                coords = _line_coords(children(trkseg, "trkpt"))
                if not coords:
                    logger.debug("Skipping empty segment %d of track '%s'", seg_idx, name)
                    continue
                features.append(
                    Feature(geometry=LineString(tuple(coords)), properties={"name": name})
                )

        for rte in children(gpx, "rte"):
            name = _name(rte)
            coords = _line_coords(children(rte, "rtept"))
            if not coords:
                logger.debug("Skipping empty route '%s'", name)
                continue
            features.append(Feature(geometry=LineString(tuple(coords)), properties={"name": name}))

        return features


def point_coord(point: Any) -> Coord | None:
    """Read ``lat``/``lon`` attributes as a ``(lon, lat)`` tuple, or ``None`` if unusable."""
    raw_lat = attribute(point, "lat")
    raw_lon = attribute(point, "lon")
    if raw_lat is None or raw_lon is None:
        return None
    try:
        lat = float(raw_lat)
        lon = float(raw_lon)
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    return (lon, lat)


def _line_coords(points: list[Any]) -> list[Coord]:
    return [coord for coord in map(point_coord, points) if coord is not None]


def _name(node: Any) -> str:
    return text_of(child(node, "name"))
