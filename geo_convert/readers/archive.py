"""ZIP archive access for the KMZ and zipped-Shapefile converters.

``ArchiveReader`` is the one capability both archive-consuming converters
use: list member names, find the first member with a suffix, read a
member's bytes. Directory entries and ``__MACOSX/`` resource forks are
never exposed as members.
"""

from __future__ import annotations

import io
import logging
import zipfile

from geo_convert.core.constants import MACOSX_RESOURCE_PREFIX
from geo_convert.core.exceptions import ArchiveReadError

logger = logging.getLogger("geo_convert.readers.archive")


class ArchiveReader:
    """Read-only view over an in-memory ZIP container."""

    def __init__(self, data: bytes) -> None:
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            msg = f"File is not a readable ZIP archive: {exc}"
            raise ArchiveReadError(msg) from exc

        self._names: list[str] = [
            info.filename
            for info in self._zip.infolist()
            if not info.is_dir() and not info.filename.startswith(MACOSX_RESOURCE_PREFIX)
        ]
        logger.debug("Opened archive | members=%s", self._names)

    def names(self) -> list[str]:
        """Member names in archive order."""
        return list(self._names)

    def find_first(self, suffix: str) -> str | None:
        """Return the first member whose name ends with *suffix* (case-insensitive)."""
        suffix = suffix.lower()
        return next((name for name in self._names if name.lower().endswith(suffix)), None)

    def read(self, name: str) -> bytes:
        """Return the decompressed bytes of member *name*.

        Raises:
            ArchiveReadError: If the member is missing or its data is corrupt.
        """
        if name not in self._names:
            msg = f"Archive has no member named {name!r}"
            raise ArchiveReadError(msg)
        try:
            return self._zip.read(name)
        except (zipfile.BadZipFile, OSError, EOFError, NotImplementedError) as exc:
            msg = f"Cannot read archive member {name!r}: {exc}"
            raise ArchiveReadError(msg) from exc
