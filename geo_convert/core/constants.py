"""Shared conversion constants — single source of truth.

Centralises the supported extension set, the user-facing list of formats,
CORS header values and the key conventions of the parsed markup tree.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Supported upload formats
# ---------------------------------------------------------------------------

SUPPORTED_EXTENSIONS: tuple[str, ...] = ("geojson", "json", "kml", "kmz", "gpx", "csv", "zip")
"""Closed set of file extensions the dispatcher accepts (lower-case, no dot)."""

SUPPORTED_FORMATS_LABEL: str = ".geojson, .json, .kml, .kmz, .gpx, .csv, .zip (shapefile)"
"""User-facing enumeration of supported formats, quoted in error messages."""

# ---------------------------------------------------------------------------
# HTTP / CORS
# ---------------------------------------------------------------------------

DEFAULT_CORS_ALLOW_ORIGIN: str = "*"
DEFAULT_CORS_ALLOW_HEADERS: str = "authorization, x-client-info, apikey, content-type"
JSON_CONTENT_TYPE: str = "application/json"

# ---------------------------------------------------------------------------
# Parsed markup tree conventions
# ---------------------------------------------------------------------------

ATTRIBUTE_PREFIX: str = "@"
"""Prefix for element attributes in the parsed tree (``<wpt lat="1">`` → ``{"@lat": "1"}``)."""

TEXT_KEY: str = "#text"
"""Key holding element text when the element also has attributes or children."""

# ---------------------------------------------------------------------------
# Archive members
# ---------------------------------------------------------------------------

KML_MEMBER_SUFFIX: str = ".kml"
SHP_MEMBER_SUFFIX: str = ".shp"
DBF_MEMBER_SUFFIX: str = ".dbf"
MACOSX_RESOURCE_PREFIX: str = "__MACOSX/"
