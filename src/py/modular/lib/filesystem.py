"""Filesystem primitives used by module discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

__all__ = ("Filesystem", "LocalFilesystem")


@runtime_checkable
class Filesystem(Protocol):
    """The filesystem operations module discovery depends on."""

    def exists(self, path: str | Path) -> bool: ...

    def make_directory(self, path: str | Path) -> None: ...

    def directories(self, path: str | Path) -> list[str]: ...

    def files(self, path: str | Path) -> list[str]: ...

    def get(self, path: str | Path) -> bytes: ...

    def put(self, path: str | Path, contents: bytes) -> None: ...

    def delete(self, path: str | Path) -> bool: ...


class LocalFilesystem:
    """:class:`Filesystem` backed by the local disk.

    Listings are sorted by name and skip hidden (dot-prefixed) entries.
    """

    def exists(self, path: str | Path) -> bool:
        return Path(path).exists()

    def make_directory(self, path: str | Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def directories(self, path: str | Path) -> list[str]:
        """Immediate subdirectories of ``path``.

        Returns:
            Directory paths, or an empty list when ``path`` is not a directory.
        """
        base = Path(path)
        if not base.is_dir():
            return []
        return [str(child) for child in sorted(base.iterdir()) if child.is_dir() and not child.name.startswith(".")]

    def files(self, path: str | Path) -> list[str]:
        """Immediate files of ``path``, without recursion.

        Returns:
            File paths, or an empty list when ``path`` is not a directory.
        """
        base = Path(path)
        if not base.is_dir():
            return []
        return [str(child) for child in sorted(base.iterdir()) if child.is_file() and not child.name.startswith(".")]

    def get(self, path: str | Path) -> bytes:
        return Path(path).read_bytes()

    def put(self, path: str | Path, contents: bytes) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(contents)

    def delete(self, path: str | Path) -> bool:
        target = Path(path)
        if not target.is_file():
            return False
        target.unlink()
        return True
