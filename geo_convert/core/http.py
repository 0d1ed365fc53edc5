"""Host-agnostic HTTP handling for the conversion endpoint.

``handle_http_request`` maps ``(method, body)`` onto an ``HttpReply`` so
that ``function_app.py`` only has to translate it into the host's
response type. CORS preflight, status codes and the catch-all for
unexpected failures live here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from geo_convert.core.config import ConverterConfig
from geo_convert.core.constants import JSON_CONTENT_TYPE
from geo_convert.core.exceptions import ConversionError
from geo_convert.core.ingress import deserialize_request_body
from geo_convert.dispatcher import handle_convert_payload
from geo_convert.models.payloads import ConversionFailure

logger = logging.getLogger("geo_convert.core.http")

INTERNAL_ERROR_MESSAGE = "Internal error while converting file"


@dataclass(frozen=True, slots=True)
class HttpReply:
    """Transport-neutral HTTP response.

    Attributes:
        status_code: HTTP status.
        body: JSON envelope, or ``None`` for an empty body (preflight).
        headers: Response headers, CORS included.
    """

    status_code: int
    body: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def body_bytes(self) -> bytes:
        if self.body is None:
            return b""
        return json.dumps(self.body, allow_nan=False).encode("utf-8")


def handle_http_request(
    method: str,
    body: bytes | str | dict[str, Any],
    *,
    config: ConverterConfig | None = None,
) -> HttpReply:
    """Handle one request to the conversion endpoint.

    - ``OPTIONS``: empty 200 with CORS headers.
    - ``POST``: 200 with the success envelope, 400 with the failure
      envelope on a ``ConversionError``, 500 on anything unexpected.
    - anything else: 405.
    """
    config = config or ConverterConfig()
    headers = dict(config.cors_headers)

    if method.upper() == "OPTIONS":
        return HttpReply(status_code=200, body=None, headers=headers)

    headers["Content-Type"] = JSON_CONTENT_TYPE

    if method.upper() != "POST":
        failure = ConversionFailure(error=f"Method {method.upper()} not allowed")
        return HttpReply(status_code=405, body=failure.to_wire(), headers=headers)

    try:
        payload = deserialize_request_body(body)
        logger.info("convertToGeoJSON called | keys=%s", sorted(payload))
        succeeded, envelope = handle_convert_payload(payload, config=config)
        reply = HttpReply(status_code=200 if succeeded else 400, body=envelope, headers=headers)
        # NaN or Infinity anywhere in the envelope fails here, not in the host.
        reply.body_bytes()
    except ConversionError as exc:
        logger.warning("Rejected request | %s", exc.to_error_dict())
        return HttpReply(
            status_code=400,
            body=ConversionFailure(error=exc.message).to_wire(),
            headers=headers,
        )
    except Exception:
        logger.exception("Unexpected error in convertToGeoJSON")
        return HttpReply(
            status_code=500,
            body=ConversionFailure(error=INTERNAL_ERROR_MESSAGE).to_wire(),
            headers=headers,
        )

    return reply
