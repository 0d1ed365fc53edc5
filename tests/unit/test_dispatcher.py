"""Tests for the conversion dispatcher and the response envelopes.

Validates:
- Extension-based routing to every converter
- Decoding happens before the extension check
- ``handle_convert_payload`` success / failure envelopes
"""

from __future__ import annotations

import json
from collections.abc import Callable

import pytest

from geo_convert.converters import ConverterRegistry, get_converter
from geo_convert.core.constants import SUPPORTED_EXTENSIONS
from geo_convert.core.exceptions import (
    Base64DecodeError,
    MalformedTransportEncodingError,
    UnsupportedFormatError,
)
from geo_convert.dispatcher import convert_upload, handle_convert_payload

POINT_GEOJSON = json.dumps({"type": "Point", "coordinates": [147.15, -9.47]}).encode()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    """Every supported extension has exactly one converter."""

    def test_all_extensions_registered(self) -> None:
        assert ConverterRegistry.supported_extensions() == list(SUPPORTED_EXTENSIONS)

    @pytest.mark.parametrize(
        ("extension", "format_name"),
        [
            ("geojson", "GeoJSON"),
            ("json", "GeoJSON"),
            ("kml", "KML"),
            ("kmz", "KMZ"),
            ("gpx", "GPX"),
            ("csv", "CSV"),
            ("zip", "Shapefile"),
            ("ZIP", "Shapefile"),
        ],
    )
    def test_lookup(self, extension: str, format_name: str) -> None:
        assert get_converter(extension).format_name == format_name

    def test_unknown_extension(self) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            get_converter("shp")
        assert exc_info.value.extension == "shp"

    def test_get_info(self) -> None:
        assert get_converter("gpx").get_info() == {
            "format_name": "GPX",
            "file_extensions": ["gpx"],
        }


# ---------------------------------------------------------------------------
# convert_upload
# ---------------------------------------------------------------------------


class TestConvertUpload:
    """One upload through decode, dispatch, convert, assemble."""

    def test_geojson_upload(self, data_url: Callable[..., str]) -> None:
        collection = convert_upload("site.GeoJSON", data_url(POINT_GEOJSON))
        assert collection.to_dict() == {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {"type": "Point", "coordinates": [147.15, -9.47]},
                }
            ],
        }

    def test_geojson_collection_members_kept(self, data_url: Callable[..., str]) -> None:
        document = {"type": "FeatureCollection", "name": "sites", "features": []}
        collection = convert_upload("sites.json", data_url(json.dumps(document).encode()))
        assert collection.to_dict() == document

    def test_kml_upload(self, data_url: Callable[..., str], kml_two_points: bytes) -> None:
        collection = convert_upload("sites.kml", data_url(kml_two_points), "text/xml")
        assert len(collection) == 2

    def test_mime_type_ignored_for_dispatch(
        self, data_url: Callable[..., str], gpx_sample: bytes
    ) -> None:
        collection = convert_upload("track.gpx", data_url(gpx_sample), "application/json")
        assert len(collection) == 3

    def test_unsupported_extension_lists_formats(self, data_url: Callable[..., str]) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            convert_upload("data.xyz", data_url(b"anything"))
        message = exc_info.value.message
        assert message.startswith("Unsupported file format: xyz.")
        for ext in (".geojson", ".json", ".kml", ".kmz", ".gpx", ".csv", ".zip"):
            assert ext in message

    def test_bad_transport_reported_before_extension(self) -> None:
        with pytest.raises(MalformedTransportEncodingError):
            convert_upload("data.xyz", "no-comma-here")

    def test_bad_base64(self) -> None:
        with pytest.raises(Base64DecodeError):
            convert_upload("sites.kml", "data:;base64,@@@@")


# ---------------------------------------------------------------------------
# handle_convert_payload
# ---------------------------------------------------------------------------


class TestHandleConvertPayload:
    """Envelope construction."""

    def test_success_envelope(self, data_url: Callable[..., str]) -> None:
        csv_bytes = b"name,lat,lon\nIntake,-9.47,147.15\n"
        succeeded, envelope = handle_convert_payload(
            {"fileName": "sites.csv", "fileContent": data_url(csv_bytes, "text/csv")}
        )

        assert succeeded is True
        assert envelope == {
            "success": True,
            "geoJson": {
                "type": "FeatureCollection",
                "features": [
                    {
                        "type": "Feature",
                        "properties": {"name": "Intake"},
                        "geometry": {"type": "Point", "coordinates": [147.15, -9.47]},
                    }
                ],
            },
            "message": "Successfully converted sites.csv to GeoJSON",
        }

    def test_empty_collection_is_success(self, data_url: Callable[..., str]) -> None:
        succeeded, envelope = handle_convert_payload(
            {"fileName": "empty.gpx", "fileContent": data_url(b'<gpx version="1.1"/>')}
        )
        assert succeeded is True
        assert envelope["geoJson"]["features"] == []

    @pytest.mark.parametrize(
        ("payload", "missing"),
        [
            ({}, "fileName, fileContent"),
            ({"fileName": "a.kml"}, "fileContent"),
            ({"fileName": "", "fileContent": "data:;base64,AA=="}, "fileName"),
            ({"fileName": "a.kml", "fileContent": 12}, "fileContent"),
        ],
    )
    def test_missing_input(self, payload: dict[str, object], missing: str) -> None:
        succeeded, envelope = handle_convert_payload(payload)
        assert succeeded is False
        assert envelope == {
            "success": False,
            "error": f"No file data provided. Missing: {missing}",
        }

    def test_failure_envelope_has_no_output(self, data_url: Callable[..., str]) -> None:
        succeeded, envelope = handle_convert_payload(
            {"fileName": "bad.csv", "fileContent": data_url(b"id,name\n1,a\n")}
        )
        assert succeeded is False
        assert set(envelope) == {"success", "error"}
        assert "latitude" in envelope["error"]

    def test_unsupported_format_envelope(self, data_url: Callable[..., str]) -> None:
        succeeded, envelope = handle_convert_payload(
            {"fileName": "data.xyz", "fileContent": data_url(b"x")}
        )
        assert succeeded is False
        assert envelope["error"].startswith("Unsupported file format: xyz")
