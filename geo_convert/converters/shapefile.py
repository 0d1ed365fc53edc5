"""Shapefile converter for zipped ``.shp`` / ``.dbf`` uploads (pyshp).

Geometry records and attribute rows are decoded as two independent
sequences and then paired positionally; a count mismatch fails the
request rather than truncating. Any decode failure aborts the whole
conversion, so partial collections are never returned.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from typing import Any

from geo_convert.converters.base import BaseConverter
from geo_convert.converters.registry import register_converter
from geo_convert.core.constants import DBF_MEMBER_SUFFIX, SHP_MEMBER_SUFFIX
from geo_convert.core.exceptions import (
    ArchiveReadError,
    GeometryRecordDecodeError,
    NoGeometryRecordFileInArchiveError,
)
from geo_convert.models.feature import Feature
from geo_convert.models.geometry import Geometry, geometry_from_geo_interface
from geo_convert.readers.archive import ArchiveReader

logger = logging.getLogger("geo_convert.converters.shapefile")


@register_converter
class ShapefileConverter(BaseConverter):
    """Converter for ESRI Shapefiles delivered as a ZIP archive."""

    format_name = "Shapefile"
    file_extensions = ("zip",)

    def convert(self, data: bytes) -> list[Feature]:
        try:
            archive = ArchiveReader(data)
        except ArchiveReadError as exc:
            msg = f"Failed to parse shapefile: {exc.message}"
            raise GeometryRecordDecodeError(msg) from exc

        shp_name = archive.find_first(SHP_MEMBER_SUFFIX)
        if shp_name is None:
            msg = (
                "No .shp file found in the ZIP archive. "
                "Please ensure your shapefile includes a .shp file."
            )
            raise NoGeometryRecordFileInArchiveError(msg)
        dbf_name = archive.find_first(DBF_MEMBER_SUFFIX)

        logger.info("Reading shapefile | shp=%s | dbf=%s", shp_name, dbf_name or "<none>")
        try:
            shp_bytes = archive.read(shp_name)
            dbf_bytes = archive.read(dbf_name) if dbf_name else None
            features = list(read_shapefile(shp_bytes, dbf_bytes, encoding=self.config.dbf_encoding))
        except GeometryRecordDecodeError:
            raise
        except Exception as exc:
            msg = f"Failed to parse shapefile: {exc}"
            raise GeometryRecordDecodeError(msg) from exc

        logger.info("Parsed shapefile | features=%d", len(features))
        return features


def read_shapefile(
    shp_bytes: bytes,
    dbf_bytes: bytes | None,
    *,
    encoding: str = "utf-8",
) -> Iterator[Feature]:
    """Yield one feature per shape record, paired with its attribute row.

    Without an attribute table every feature gets empty properties.

    Raises:
        GeometryRecordDecodeError: If shape and row counts differ.
        shapefile.ShapefileException: And other low-level errors from pyshp
            on corrupt input.
    """
    import shapefile

    sources: dict[str, Any] = {"shp": io.BytesIO(shp_bytes)}
    if dbf_bytes is not None:
        sources["dbf"] = io.BytesIO(dbf_bytes)

    with shapefile.Reader(encoding=encoding, **sources) as reader:
        geometries = [_shape_geometry(shape) for shape in reader.iterShapes()]
        if dbf_bytes is None:
            for geometry in geometries:
                yield Feature(geometry=geometry, properties={})
            return

        rows = [record.as_dict(date_strings=True) for record in reader.iterRecords()]
        if len(geometries) != len(rows):
            msg = (
                f"Failed to parse shapefile: {len(geometries)} shape record(s) "
                f"but {len(rows)} attribute row(s)"
            )
            raise GeometryRecordDecodeError(msg)

        for geometry, row in zip(geometries, rows, strict=True):
            yield Feature(geometry=geometry, properties=row)


def _shape_geometry(shape: Any) -> Geometry | None:
    """Convert a pyshp shape to a geometry; NULL and empty shapes become ``None``."""
    import shapefile

    if shape.shapeType == shapefile.NULL or not shape.points:
        return None
    return geometry_from_geo_interface(shape.__geo_interface__)
