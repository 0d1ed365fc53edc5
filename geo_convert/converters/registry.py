"""Extension → converter lookup.

The set of accepted extensions is closed (``SUPPORTED_EXTENSIONS``);
registration only binds each of them to the converter class that owns it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geo_convert.core.constants import SUPPORTED_EXTENSIONS
from geo_convert.core.exceptions import UnsupportedFormatError

if TYPE_CHECKING:
    from geo_convert.converters.base import BaseConverter
    from geo_convert.core.config import ConverterConfig


class ConverterRegistry:
    """Registry of format converters keyed by lower-case extension."""

    _extension_map: dict[str, type[BaseConverter]] = {}

    @classmethod
    def register(cls, converter_class: type[BaseConverter]) -> type[BaseConverter]:
        """Register a converter class for each of its ``file_extensions``.

        Can be used as a decorator::

            @register_converter
            class GPXConverter(BaseConverter):
                ...

        Raises:
            ValueError: If an extension is outside the supported set.
        """
        for declared in converter_class.file_extensions:
            ext = declared.lower()
            if ext not in SUPPORTED_EXTENSIONS:
                msg = f"{converter_class.__name__} declares unsupported extension {ext!r}"
                raise ValueError(msg)
            cls._extension_map[ext] = converter_class
        return converter_class

    @classmethod
    def get_converter(cls, extension: str, config: ConverterConfig | None = None) -> BaseConverter:
        """Instantiate the converter for *extension*.

        Raises:
            UnsupportedFormatError: If no converter owns the extension.
        """
        converter_class = cls._extension_map.get(extension.lower())
        if converter_class is None:
            raise UnsupportedFormatError(extension)
        return converter_class(config)

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Registered extensions, in the canonical order."""
        return [ext for ext in SUPPORTED_EXTENSIONS if ext in cls._extension_map]


def register_converter(converter_class: type[BaseConverter]) -> type[BaseConverter]:
    """Register a converter. See ConverterRegistry.register."""
    return ConverterRegistry.register(converter_class)


def get_converter(extension: str, config: ConverterConfig | None = None) -> BaseConverter:
    """Get a converter instance. See ConverterRegistry.get_converter."""
    return ConverterRegistry.get_converter(extension, config)
