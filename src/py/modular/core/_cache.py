"""On-disk class map cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import msgspec
import structlog

from modular.lib.exceptions import CacheCorruptError
from modular.lib.filesystem import LocalFilesystem
from modular.lib.serialization import from_json, to_json

if TYPE_CHECKING:
    from pathlib import Path

    from modular.core._explorer import FileMap
    from modular.lib.filesystem import Filesystem

__all__ = ("CacheHit", "CacheMiss", "CacheResult", "ClassMapCache")

logger = structlog.get_logger()


@dataclass(frozen=True)
class CacheHit:
    """The cache file existed and was decoded."""

    file_map: FileMap


@dataclass(frozen=True)
class CacheMiss:
    """The cache file did not exist and an empty one was written."""

    file_map: FileMap = field(default_factory=dict)


CacheResult = CacheHit | CacheMiss


class ClassMapCache:
    """Persists the discovered file map as JSON.

    The cache is never refreshed automatically: once the file exists its
    contents are authoritative until it is rebuilt or deleted.
    """

    __slots__ = ("files", "path")

    def __init__(self, path: str | Path, files: Filesystem | None = None) -> None:
        self.path = str(path)
        self.files = files or LocalFilesystem()

    def exists(self) -> bool:
        return self.files.exists(self.path)

    def load(self) -> CacheResult:
        """Read the cached file map, bootstrapping an empty cache on a miss.

        Raises:
            CacheCorruptError: If the file is not a valid file map.

        Returns:
            :class:`CacheHit` with the stored map, or :class:`CacheMiss` with an empty map.
        """
        if not self.exists():
            logger.info("Class map cache not found, creating an empty one", path=self.path)
            return CacheMiss(file_map=self.create())

        try:
            file_map = from_json(self.files.get(self.path), dict[str, dict[str, list[str]]])
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise CacheCorruptError(self.path, str(e)) from e
        return CacheHit(file_map=file_map)

    def create(self) -> FileMap:
        """Write an empty file map to the cache file."""
        empty: FileMap = {}
        self.write(empty)
        return empty

    def write(self, file_map: FileMap) -> None:
        self.files.put(self.path, to_json(file_map, pretty=True))
        logger.debug("Wrote class map cache", path=self.path, modules=len(file_map))

    def clear(self) -> bool:
        """Delete the cache file.

        Returns:
            ``True`` when a file was removed.
        """
        return self.files.delete(self.path)
