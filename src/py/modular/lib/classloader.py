"""Class map autoloader for module files."""

from __future__ import annotations

import importlib
import importlib.abc
import importlib.machinery
import importlib.util
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import ModuleType

__all__ = ("ClassLoader",)

logger = structlog.get_logger()


class ClassLoader(importlib.abc.MetaPathFinder):
    """Import hook resolving namespaced identifiers to module files.

    Identifiers are registered with :meth:`add_class_map`. When the identifier
    separator is ``"."`` the loader also answers for every dotted prefix of a
    registered identifier with a namespace package, so
    ``import Modules.Blog.Controllers.PostController`` works once the loader
    is installed.
    """

    def __init__(self, separator: str = ".") -> None:
        self.separator = separator
        self._class_map: dict[str, str] = {}
        self._packages: set[str] = set()

    @property
    def class_map(self) -> dict[str, str]:
        """A copy of the registered identifier to path mapping."""
        return dict(self._class_map)

    @property
    def installed(self) -> bool:
        return self in sys.meta_path

    def add_class_map(self, mapping: Mapping[str, str]) -> None:
        for identifier, path in mapping.items():
            self._class_map[identifier] = str(path)
            parts = identifier.split(".")
            for index in range(1, len(parts)):
                self._packages.add(".".join(parts[:index]))

    def install(self) -> None:
        """Prepend the loader to :data:`sys.meta_path`."""
        if not self.installed:
            sys.meta_path.insert(0, self)

    def uninstall(self) -> None:
        if self.installed:
            sys.meta_path.remove(self)

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: ModuleType | None = None,
    ) -> importlib.machinery.ModuleSpec | None:
        if fullname in self._class_map:
            return importlib.util.spec_from_file_location(fullname, self._class_map[fullname])
        if fullname in self._packages:
            return importlib.machinery.ModuleSpec(fullname, None, is_package=True)
        return None

    def load(self, identifier: str) -> ModuleType | None:
        """Import the file registered for ``identifier``.

        Args:
            identifier: A registered namespaced identifier.

        Raises:
            ImportError: If the registered file cannot be imported.

        Returns:
            The imported module, or ``None`` when the identifier is unknown.
        """
        if identifier not in self._class_map:
            return None
        if identifier in sys.modules:
            return sys.modules[identifier]
        if self.installed and self.separator == ".":
            return importlib.import_module(identifier)

        spec = importlib.util.spec_from_file_location(identifier, self._class_map[identifier])
        if spec is None or spec.loader is None:
            msg = f"No loader available for {self._class_map[identifier]}"
            raise ImportError(msg, name=identifier)
        module = importlib.util.module_from_spec(spec)
        sys.modules[identifier] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            del sys.modules[identifier]
            raise
        logger.debug("Loaded module class", identifier=identifier, path=self._class_map[identifier])
        return module

    def resolve(self, identifier: str) -> Any | None:
        """Load ``identifier`` and return the attribute named after its last segment."""
        module = self.load(identifier)
        if module is None:
            return None
        return getattr(module, identifier.rsplit(self.separator, 1)[-1], None)
