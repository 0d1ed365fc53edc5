"""Base converter interface.

A converter turns the decoded bytes of one upload into an ordered list of
``Feature`` objects. The collection itself is always built by the
assembler. A converter never catches its own ``ConversionError``s: they
propagate to the dispatcher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from geo_convert.core.config import ConverterConfig
from geo_convert.models.feature import Feature, FeatureCollection, assemble


class BaseConverter(ABC):
    """Abstract base class for upload format converters."""

    format_name: ClassVar[str] = "Unknown"
    file_extensions: ClassVar[tuple[str, ...]] = ()

    def __init__(self, config: ConverterConfig | None = None) -> None:
        self.config = config or ConverterConfig()

    @abstractmethod
    def convert(self, data: bytes) -> list[Feature]:
        """Convert raw upload bytes into features in source order.

        Raises:
            ConversionError: Any structural or decode failure.
        """

    def convert_collection(self, data: bytes) -> FeatureCollection:
        """Convert raw upload bytes and assemble the ``FeatureCollection``.

        Formats that carry collection-level members override this to keep them.
        """
        return assemble(self.convert(data))

    @classmethod
    def get_info(cls) -> dict[str, object]:
        """Converter metadata for listings."""
        return {
            "format_name": cls.format_name,
            "file_extensions": list(cls.file_extensions),
        }
