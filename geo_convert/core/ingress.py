"""Thin ingress boundary helpers for the conversion endpoint.

Centralises the transport concerns so that ``function_app.py`` and the
dispatcher never touch raw request bytes:

- **deserialize_request_body** — normalises the HTTP body (bytes, str or
  an already-decoded dict) into a plain dict.
- **decode_data_url** — splits a ``<scheme-prefix>,<base64>`` data URL and
  decodes its payload to bytes.
- **file_extension** — derives the lower-cased extension used for
  converter selection.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from geo_convert.core.exceptions import (
    Base64DecodeError,
    InvalidRequestBodyError,
    MalformedTransportEncodingError,
)

logger = logging.getLogger("geo_convert.core.ingress")


# ---------------------------------------------------------------------------
# Request body deserialisation
# ---------------------------------------------------------------------------


def deserialize_request_body(raw: bytes | str | dict[str, Any] | object) -> dict[str, Any]:
    """Normalise an HTTP request body to a plain dict.

    Args:
        raw: The body as received from the host (bytes or str), or a dict
            when a caller has already decoded it.

    Returns:
        Parsed dict payload.

    Raises:
        InvalidRequestBodyError: If *raw* is not a JSON object.
    """
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, bytes | bytearray):
        if not raw.strip():
            msg = "Request body is empty"
            raise InvalidRequestBodyError(msg)
        raw = bytes(raw).decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Request body is not valid JSON: {exc}"
            raise InvalidRequestBodyError(msg) from exc
        if not isinstance(parsed, dict):
            msg = f"Request body JSON must be an object, got {type(parsed).__name__}"
            raise InvalidRequestBodyError(msg)
        return parsed
    msg = f"Unexpected request body type: {type(raw).__name__}"
    raise InvalidRequestBodyError(msg)


# ---------------------------------------------------------------------------
# Data URL decoding
# ---------------------------------------------------------------------------


def decode_data_url(file_content: str) -> bytes:
    """Decode a ``<scheme-prefix>,<base64 payload>`` string to raw bytes.

    Whitespace inside the payload is ignored and missing ``=`` padding is
    restored before decoding.

    Raises:
        MalformedTransportEncodingError: If there is no comma separator or
            nothing after it.
        Base64DecodeError: If the payload is not valid base64.
    """
    if "," not in file_content:
        msg = "Invalid file content format. Expected base64 data URL."
        raise MalformedTransportEncodingError(msg)

    _, _, payload = file_content.partition(",")
    payload = "".join(payload.split())
    if not payload:
        msg = "Failed to extract base64 data from file content"
        raise MalformedTransportEncodingError(msg)

    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        msg = "Failed to decode base64 file content"
        raise Base64DecodeError(msg) from exc

    logger.debug("Decoded data URL | base64_chars=%d | bytes=%d", len(payload), len(data))
    return data


# ---------------------------------------------------------------------------
# Extension selection
# ---------------------------------------------------------------------------


def file_extension(file_name: str) -> str:
    """Return the text after the last ``.`` of the lower-cased file name.

    A name without a dot yields the whole (lower-cased) name, which never
    matches a supported extension.
    """
    return file_name.lower().rsplit(".", 1)[-1]
