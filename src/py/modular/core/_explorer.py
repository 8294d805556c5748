"""Module discovery on the filesystem."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING

import structlog

from modular.core._manifest import Manifest, parse_manifest
from modular.lib.exceptions import ManifestNotFoundError
from modular.lib.filesystem import LocalFilesystem

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from modular.lib.filesystem import Filesystem

__all__ = ("Explorer", "FileMap", "Module")

logger = structlog.get_logger()

FileMap = dict[str, dict[str, list[str]]]
"""Module name -> directory name -> file names."""


@dataclass(frozen=True)
class Module:
    """A module directory under the modules root."""

    name: str
    path: str
    reader: Callable[[str], Manifest] = field(repr=False, compare=False)

    @cached_property
    def manifest(self) -> Manifest:
        return self.reader(self.path)


class Explorer:
    """Finds enabled modules and the files in their category directories."""

    __slots__ = ("files", "manifest_file", "modules_path")

    def __init__(
        self,
        modules_path: str | Path,
        manifest_file: str = "manifest.json",
        files: Filesystem | None = None,
    ) -> None:
        self.modules_path = str(modules_path)
        self.manifest_file = manifest_file
        self.files = files or LocalFilesystem()

    def list_modules(self) -> list[Module]:
        """Module directories under the modules root.

        The root directory is created when it does not exist yet.

        Returns:
            The modules, in directory listing order.
        """
        if not self.files.exists(self.modules_path):
            self.files.make_directory(self.modules_path)
            logger.info("Created modules directory", path=self.modules_path)
            return []

        modules: list[Module] = []
        for directory in self.files.directories(self.modules_path):
            name = os.path.basename(directory)
            # Skip private directories such as __pycache__
            if name.startswith(("_", ".")):
                logger.debug("Skipping private module directory", directory=directory)
                continue
            modules.append(Module(name=name, path=directory, reader=self.read_manifest))
        return modules

    def list_enabled_modules(self) -> list[Module]:
        """Modules whose manifest sets ``enabled`` to ``true``.

        Raises:
            ManifestNotFoundError: If any module directory has no manifest.

        Returns:
            The enabled modules.
        """
        return [module for module in self.list_modules() if module.manifest.enabled]

    def read_manifest(self, module_path: str | Path) -> Manifest:
        """Read the manifest of the module at ``module_path``.

        Args:
            module_path: The module directory.

        Raises:
            ManifestNotFoundError: If the manifest file does not exist.

        Returns:
            The parsed manifest.
        """
        module_path = str(module_path)
        module = os.path.basename(module_path.rstrip("/\\"))
        manifest_path = os.path.join(module_path, self.manifest_file)

        if not self.files.exists(manifest_path):
            raise ManifestNotFoundError(module, self.manifest_file)

        return parse_manifest(module, self.files.get(manifest_path))

    def collect_files(self, directories: Iterable[str]) -> FileMap:
        """Files found directly inside each enabled module's category directories.

        Directories without files are left out of the result.

        Args:
            directories: Directory names to look for in every module.

        Returns:
            Mapping of module name to directory name to file names.
        """
        directories = list(directories)
        file_map: FileMap = {}

        for module in self.list_enabled_modules():
            for directory in directories:
                if files := self.files.files(os.path.join(module.path, directory)):
                    file_map.setdefault(module.name, {})[directory] = [os.path.basename(file) for file in files]

        logger.debug("Collected module files", modules=list(file_map), directories=directories)
        return file_map
