"""Feature and FeatureCollection — the canonical conversion output.

A ``Feature`` pairs one geometry with a flat, JSON-scalar property map.
``assemble`` is the canonical assembler: it wraps whatever ordered list
of features a converter produced into a ``FeatureCollection`` without
reordering, deduplicating or filtering anything.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from geo_convert.models.geometry import Geometry


@dataclass(frozen=True, slots=True)
class Feature:
    """A single geometry with its properties.

    Attributes:
        geometry: The feature geometry, or ``None`` for a null geometry
            (empty shapefile records, pass-through features).
        properties: Property map; ``None`` only when a pass-through
            GeoJSON feature declared ``"properties": null``.
        members: Extra top-level members of pass-through features
            (``id``, ``bbox``, foreign members), emitted unchanged.
    """

    geometry: Geometry | None
    properties: dict[str, Any] | None = field(default_factory=dict)
    members: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a GeoJSON ``Feature`` mapping."""
        return {
            **self.members,
            "type": "Feature",
            "properties": self.properties,
            "geometry": self.geometry.to_dict() if self.geometry is not None else None,
        }


@dataclass(frozen=True, slots=True)
class FeatureCollection:
    """Ordered features in discovery order.

    Attributes:
        features: The features, never reordered or filtered.
        members: Extra top-level members of a pass-through collection
            (``name``, ``crs``, ``bbox``, foreign members), emitted unchanged.
    """

    features: tuple[Feature, ...] = ()
    members: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a GeoJSON ``FeatureCollection`` mapping."""
        return {
            **self.members,
            "type": "FeatureCollection",
            "features": [feature.to_dict() for feature in self.features],
        }

    def __len__(self) -> int:
        return len(self.features)


def assemble(
    features: Iterable[Feature],
    members: dict[str, Any] | None = None,
) -> FeatureCollection:
    """Wrap an ordered feature list as a ``FeatureCollection``.

    *members* carries collection-level members of a pass-through upload.
    """
    return FeatureCollection(features=tuple(features), members=dict(members or {}))
