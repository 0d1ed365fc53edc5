"""CSV converter: one Point per row from latitude/longitude columns."""

from __future__ import annotations

import csv
import logging
import math

from geo_convert.converters.base import BaseConverter
from geo_convert.converters.registry import register_converter
from geo_convert.core.exceptions import InsufficientRowsError, MissingCoordinateColumnsError
from geo_convert.models.feature import Feature
from geo_convert.models.geometry import Point

logger = logging.getLogger("geo_convert.converters.tabular")


@register_converter
class CSVConverter(BaseConverter):
    """Converter for comma-separated point tables.

    Every column other than the two coordinate columns is kept as a string
    property under its lower-cased, trimmed header name.
    """

    format_name = "CSV"
    file_extensions = ("csv",)

    def convert(self, data: bytes) -> list[Feature]:
        text = data.decode("utf-8-sig", errors="replace")
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) < 2:
            msg = "CSV file must have at least a header and one data row"
            raise InsufficientRowsError(msg)

        rows = csv.reader(lines)
        headers = [h.strip().lower() for h in next(rows)]
        lat_idx, lon_idx = find_coordinate_columns(headers)

        features: list[Feature] = []
        for line_no, row in enumerate(rows, start=2):
            values = [v.strip() for v in row]
            if len(values) != len(headers):
                logger.debug(
                    "Skipping CSV line %d: %d values for %d columns",
                    line_no,
                    len(values),
                    len(headers),
                )
                continue

            lat = _parse_number(values[lat_idx])
            lon = _parse_number(values[lon_idx])
            if lat is None or lon is None:
                logger.debug("Skipping CSV line %d: non-numeric coordinates", line_no)
                continue

            properties = {
                header: values[idx]
                for idx, header in enumerate(headers)
                if idx not in (lat_idx, lon_idx)
            }
            features.append(Feature(geometry=Point((lon, lat)), properties=properties))

        return features


def find_coordinate_columns(headers: list[str]) -> tuple[int, int]:
    """Locate the latitude and longitude columns of a normalised header.

    Latitude is the first header containing ``"lat"`` or equal to ``"y"``;
    longitude the first containing ``"lon"``/``"lng"`` or equal to ``"x"``.

    Raises:
        MissingCoordinateColumnsError: Naming whichever column is absent.
    """
    lat_idx = next((i for i, h in enumerate(headers) if "lat" in h or h == "y"), None)
    lon_idx = next(
        (i for i, h in enumerate(headers) if "lon" in h or "lng" in h or h == "x"),
        None,
    )

    missing = []
    if lat_idx is None:
        missing.append("latitude")
    if lon_idx is None:
        missing.append("longitude")
    if missing:
        raise MissingCoordinateColumnsError(missing)

    return lat_idx, lon_idx  # type: ignore[return-value]


def _parse_number(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
