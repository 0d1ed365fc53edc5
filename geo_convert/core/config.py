"""Converter configuration loaded from environment variables.

Azure Functions app settings (or ``local.settings.json`` for local dev)
are the source of truth. Every value has a default that matches the
behaviour callers already rely on.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range, so a bad setting surfaces at startup rather than on
    the first upload.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from geo_convert.core.constants import DEFAULT_CORS_ALLOW_HEADERS, DEFAULT_CORS_ALLOW_ORIGIN
from geo_convert.core.exceptions import ConversionError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigValidationError(ConversionError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ConverterConfig:
    """Immutable converter configuration.

    Attributes:
        cors_allow_origin: Value of ``Access-Control-Allow-Origin``.
        cors_allow_headers: Value of ``Access-Control-Allow-Headers``.
        dbf_encoding: Text encoding used for shapefile attribute tables.
        log_level: Level applied to the ``geo_convert`` logger.
    """

    cors_allow_origin: str = DEFAULT_CORS_ALLOW_ORIGIN
    cors_allow_headers: str = DEFAULT_CORS_ALLOW_HEADERS
    dbf_encoding: str = "utf-8"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> ConverterConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is empty, an unknown codec or
                an unknown log level.
        """
        config = cls(
            cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", DEFAULT_CORS_ALLOW_ORIGIN),
            cors_allow_headers=os.getenv("CORS_ALLOW_HEADERS", DEFAULT_CORS_ALLOW_HEADERS),
            dbf_encoding=os.getenv("SHAPEFILE_DBF_ENCODING", "utf-8"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        _validate(config)
        return config

    @property
    def cors_headers(self) -> dict[str, str]:
        """CORS headers attached to every response."""
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Headers": self.cors_allow_headers,
        }


def _validate(config: ConverterConfig) -> None:
    """Validate configuration values.  Raises ``ConfigValidationError``."""
    if not config.cors_allow_origin.strip():
        raise ConfigValidationError(
            "CORS_ALLOW_ORIGIN",
            config.cors_allow_origin,
            "must not be empty",
        )

    if not config.cors_allow_headers.strip():
        raise ConfigValidationError(
            "CORS_ALLOW_HEADERS",
            config.cors_allow_headers,
            "must not be empty",
        )

    try:
        codecs.lookup(config.dbf_encoding)
    except LookupError as exc:
        raise ConfigValidationError(
            "SHAPEFILE_DBF_ENCODING",
            config.dbf_encoding,
            "must be a known text encoding",
        ) from exc

    if config.log_level not in _LOG_LEVELS:
        raise ConfigValidationError(
            "LOG_LEVEL",
            config.log_level,
            f"must be one of {', '.join(sorted(_LOG_LEVELS))}",
        )
