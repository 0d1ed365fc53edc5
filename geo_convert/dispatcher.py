"""Conversion dispatcher.

``convert_upload`` is the whole pipeline for one file: decode the data URL,
pick the converter from the file extension, convert, assemble.

``handle_convert_payload`` wraps it for the endpoint and is the only place
that turns a ``ConversionError`` into the wire-level failure envelope.
"""

from __future__ import annotations

import logging
from typing import Any

from geo_convert.converters import get_converter
from geo_convert.core.config import ConverterConfig
from geo_convert.core.exceptions import ConversionError
from geo_convert.core.ingress import decode_data_url, file_extension
from geo_convert.models.feature import FeatureCollection
from geo_convert.models.payloads import (
    ConversionFailure,
    ConversionSuccess,
    validate_convert_request,
)

logger = logging.getLogger("geo_convert.dispatcher")


def convert_upload(
    file_name: str,
    file_content: str,
    file_type: str | None = None,
    *,
    config: ConverterConfig | None = None,
) -> FeatureCollection:
    """Convert one uploaded file to a ``FeatureCollection``.

    Args:
        file_name: Declared file name; its extension selects the converter.
        file_content: ``<scheme-prefix>,<base64 payload>`` data URL.
        file_type: Declared MIME type. Logged only; never used for dispatch.
        config: Converter configuration (defaults when omitted).

    Raises:
        ConversionError: Any input, structural or decode failure.
    """
    extension = file_extension(file_name)
    logger.info(
        "Converting upload | file=%s | type=%s | extension=%s",
        file_name,
        file_type or "",
        extension,
    )

    data = decode_data_url(file_content)
    logger.info("Decoded upload | file=%s | bytes=%d", file_name, len(data))
    converter = get_converter(extension, config)

    collection = converter.convert_collection(data)
    logger.info(
        "Conversion successful | file=%s | format=%s | features=%d",
        file_name,
        converter.format_name,
        len(collection),
    )
    return collection


def handle_convert_payload(
    payload: dict[str, Any],
    *,
    config: ConverterConfig | None = None,
) -> tuple[bool, dict[str, Any]]:
    """Run a conversion request and build its response envelope.

    Returns:
        ``(succeeded, envelope)`` where the envelope is either
        ``{success: true, geoJson, message}`` or ``{success: false, error}``.
    """
    try:
        request = validate_convert_request(payload)
        collection = convert_upload(
            request["fileName"],
            request["fileContent"],
            request.get("fileType"),
            config=config,
        )
    except ConversionError as exc:
        logger.warning("Conversion failed | %s", exc.to_error_dict())
        return False, ConversionFailure(error=exc.message).to_wire()

    success = ConversionSuccess(
        geo_json=collection.to_dict(),
        message=f"Successfully converted {request['fileName']} to GeoJSON",
    )
    return True, success.to_wire()
