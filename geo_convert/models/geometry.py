"""Geometry variants produced by the converters.

Every coordinate is a ``(lon, lat)`` tuple of floats, whatever order the
source format stores them in. ``GeoJsonGeometry`` carries geometries that
arrive already GeoJSON-shaped (pass-through uploads, Multi* shapefile
records) without reinterpreting them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

Coord = tuple[float, float]
Ring = tuple[Coord, ...]


@dataclass(frozen=True, slots=True)
class Point:
    """A single position."""

    coord: Coord
    geometry_type: ClassVar[str] = "Point"

    def to_dict(self) -> dict[str, object]:
        return {"type": self.geometry_type, "coordinates": list(self.coord)}


@dataclass(frozen=True, slots=True)
class LineString:
    """An ordered sequence of positions."""

    coords: tuple[Coord, ...]
    geometry_type: ClassVar[str] = "LineString"

    def to_dict(self) -> dict[str, object]:
        return {"type": self.geometry_type, "coordinates": [list(c) for c in self.coords]}


@dataclass(frozen=True, slots=True)
class Polygon:
    """A polygon as a sequence of closed rings, exterior first.

    KML and GPX only ever populate the exterior ring; shapefiles may also
    carry holes.
    """

    rings: tuple[Ring, ...]
    geometry_type: ClassVar[str] = "Polygon"

    @property
    def exterior(self) -> Ring:
        return self.rings[0] if self.rings else ()

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.geometry_type,
            "coordinates": [[list(c) for c in ring] for ring in self.rings],
        }


@dataclass(frozen=True, slots=True)
class GeoJsonGeometry:
    """A geometry kept exactly as its GeoJSON mapping."""

    mapping: dict[str, Any] = field(default_factory=dict)

    @property
    def geometry_type(self) -> str:
        return str(self.mapping.get("type", ""))

    def to_dict(self) -> dict[str, Any]:
        return self.mapping


Geometry = Point | LineString | Polygon | GeoJsonGeometry


def to_coord(position: Sequence[Any]) -> Coord:
    """Reduce a ``[x, y, (z, m...)]`` position to a ``(lon, lat)`` float tuple.

    Raises:
        ValueError: If the position has fewer than two numeric components.
    """
    if len(position) < 2:
        msg = f"Position needs at least 2 components, got {len(position)}"
        raise ValueError(msg)
    return (float(position[0]), float(position[1]))


def _flatten_positions(value: Any) -> Any:
    """Strip every nested position down to ``[lon, lat]``."""
    if value and isinstance(value[0], int | float):
        return list(to_coord(value))
    return [_flatten_positions(v) for v in value]


def geometry_from_geo_interface(geo: Mapping[str, Any]) -> Geometry:
    """Build a geometry from a ``__geo_interface__`` style mapping.

    Point, LineString and Polygon become typed variants; anything else is
    kept as ``GeoJsonGeometry`` with its positions reduced to 2D.
    """
    geometry_type = geo.get("type")
    coordinates = geo.get("coordinates", ())

    if geometry_type == "Point":
        return Point(to_coord(coordinates))
    if geometry_type == "LineString":
        return LineString(tuple(to_coord(c) for c in coordinates))
    if geometry_type == "Polygon":
        return Polygon(tuple(tuple(to_coord(c) for c in ring) for ring in coordinates))

    return GeoJsonGeometry(
        {"type": geometry_type, "coordinates": _flatten_positions(list(coordinates))}
    )
