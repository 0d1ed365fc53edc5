"""Conversion error taxonomy.

Every failure raised while turning an uploaded file into GeoJSON inherits
from ``ConversionError`` and carries structured context fields so the
dispatcher can build a uniform failure envelope and the logs stay
consistent.

Taxonomy categories
-------------------
- ``InputValidationError`` — the request itself is unusable (missing
  fields, bad data URL, unsupported extension).
- ``StructuralError``      — the file decoded but does not have the shape
  the format requires (no ``.shp`` member, no coordinate columns...).
- ``DecodeError``          — the bytes of the file could not be parsed.

None of these are retried: a request either converts completely or fails.
Every exception exposes ``to_error_dict()`` for logging.
"""

from __future__ import annotations

from geo_convert.core.constants import SUPPORTED_FORMATS_LABEL


class ConversionError(Exception):
    """Base exception for all conversion-domain errors.

    Attributes:
        message: Human-readable error description (sent to the caller).
        stage: Pipeline stage where the error occurred
            (e.g. ``"ingress"``, ``"kml"``, ``"shapefile"``).
        code: Machine-readable error code (e.g. ``"MISSING_INPUT"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, InputValidationError):
            return "input_validation"
        if isinstance(self, StructuralError):
            return "structural"
        if isinstance(self, DecodeError):
            return "decode"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class InputValidationError(ConversionError):
    """The request cannot be processed as submitted."""


class StructuralError(ConversionError):
    """The decoded file lacks a structure its format requires."""


class DecodeError(ConversionError):
    """The file bytes could not be parsed."""


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InvalidRequestBodyError(InputValidationError):
    """Raised when the request body is not a JSON object."""

    default_stage = "ingress"
    default_code = "INVALID_REQUEST_BODY"


class MissingInputError(InputValidationError):
    """Raised when ``fileName`` and/or ``fileContent`` are absent.

    Attributes:
        missing: Names of the absent request fields, in request order.
    """

    default_stage = "ingress"
    default_code = "MISSING_INPUT"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"No file data provided. Missing: {', '.join(self.missing)}")


class MalformedTransportEncodingError(InputValidationError):
    """Raised when ``fileContent`` is not a ``<prefix>,<base64>`` data URL."""

    default_stage = "ingress"
    default_code = "MALFORMED_TRANSPORT_ENCODING"


class Base64DecodeError(InputValidationError):
    """Raised when the data URL payload is not valid base64."""

    default_stage = "ingress"
    default_code = "BASE64_DECODE_FAILED"


class UnsupportedFormatError(InputValidationError):
    """Raised when the file extension has no registered converter."""

    default_stage = "dispatch"
    default_code = "UNSUPPORTED_FORMAT"

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(
            f"Unsupported file format: {extension}. Supported formats: {SUPPORTED_FORMATS_LABEL}"
        )


# ---------------------------------------------------------------------------
# Structural
# ---------------------------------------------------------------------------


class InvalidGeoJsonShapeError(StructuralError):
    """Raised when a JSON document is not a FeatureCollection, Feature or geometry."""

    default_stage = "geojson"
    default_code = "INVALID_GEOJSON_SHAPE"


class NoMarkupMemberInArchiveError(StructuralError):
    """Raised when a KMZ archive holds no ``.kml`` member."""

    default_stage = "kmz"
    default_code = "NO_KML_IN_ARCHIVE"


class NoGeometryRecordFileInArchiveError(StructuralError):
    """Raised when a shapefile ZIP holds no ``.shp`` member."""

    default_stage = "shapefile"
    default_code = "NO_SHP_IN_ARCHIVE"


class InsufficientRowsError(StructuralError):
    """Raised when a CSV has no header or no data row."""

    default_stage = "csv"
    default_code = "INSUFFICIENT_ROWS"


class MissingCoordinateColumnsError(StructuralError):
    """Raised when a CSV header has no latitude and/or longitude column.

    Attributes:
        missing: ``"latitude"`` and/or ``"longitude"``.
    """

    default_stage = "csv"
    default_code = "MISSING_COORDINATE_COLUMNS"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"CSV must contain latitude/longitude columns (missing: {', '.join(self.missing)}). "
            'Recognised headers include "lat", "latitude", "y", "lon", "lng", "longitude", "x".'
        )


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


class GeoJsonParseError(DecodeError):
    """Raised when a ``.geojson``/``.json`` upload is not valid JSON."""

    default_stage = "geojson"
    default_code = "GEOJSON_PARSE_FAILED"


class MarkupParseError(DecodeError):
    """Raised when a KML/GPX document is not well-formed XML."""

    default_stage = "markup"
    default_code = "MARKUP_PARSE_FAILED"


class ArchiveReadError(DecodeError):
    """Raised when an upload expected to be a ZIP container cannot be opened."""

    default_stage = "archive"
    default_code = "ARCHIVE_READ_FAILED"


class GeometryRecordDecodeError(DecodeError):
    """Raised when the ``.shp``/``.dbf`` streams cannot be decoded."""

    default_stage = "shapefile"
    default_code = "SHAPEFILE_DECODE_FAILED"
