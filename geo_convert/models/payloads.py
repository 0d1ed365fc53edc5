"""Request and response contracts for the conversion endpoint.

The inbound request is a ``TypedDict`` checked by
``validate_convert_request``; the outbound envelopes are pydantic models
so the wire keys (``geoJson``) stay camelCase while the Python side uses
snake_case.

Usage::

    from geo_convert.models.payloads import validate_convert_request

    request = validate_convert_request(body)
    request["fileName"]  # now known to be a non-empty string
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from geo_convert.core.exceptions import MissingInputError

# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class ConvertRequest(TypedDict):
    """Client → ``convertToGeoJSON`` endpoint."""

    fileName: str  # noqa: N815
    fileContent: str  # noqa: N815
    fileType: NotRequired[str | None]  # noqa: N815


_REQUIRED_FIELDS: tuple[str, ...] = ("fileName", "fileContent")


def validate_convert_request(raw: dict[str, Any]) -> ConvertRequest:
    """Check that *raw* carries a non-empty ``fileName`` and ``fileContent``.

    Raises:
        MissingInputError: Naming every required field that is absent,
            empty or not a string.
    """
    missing = [
        key for key in _REQUIRED_FIELDS if not isinstance(raw.get(key), str) or not raw[key]
    ]
    if missing:
        raise MissingInputError(missing)

    file_type = raw.get("fileType")
    request: ConvertRequest = {
        "fileName": raw["fileName"],
        "fileContent": raw["fileContent"],
        "fileType": str(file_type) if file_type is not None else None,
    }
    return request


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ConversionSuccess(BaseModel):
    """Success envelope: the converted collection plus a human message."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    geo_json: dict[str, Any] = Field(alias="geoJson")
    message: str = ""

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ConversionFailure(BaseModel):
    """Failure envelope. Never carries partial output."""

    success: bool = False
    error: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump()
