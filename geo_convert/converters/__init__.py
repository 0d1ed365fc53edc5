"""Format converters for uploaded geographic files.

Supported formats:
- GeoJSON (.geojson, .json) - pass-through with shape normalisation
- KML / KMZ (.kml, .kmz) - lxml tree walk
- GPX (.gpx) - lxml tree walk
- CSV (.csv) - point per row from lat/lon columns
- Shapefile (.zip) - pyshp over the zipped .shp/.dbf pair
"""

from geo_convert.converters import geojson, gpx, kml, shapefile, tabular  # noqa: F401
from geo_convert.converters.base import BaseConverter
from geo_convert.converters.registry import (
    ConverterRegistry,
    get_converter,
    register_converter,
)

__all__ = [
    "BaseConverter",
    "ConverterRegistry",
    "get_converter",
    "register_converter",
]
