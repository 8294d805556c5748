"""Module loader exception types.

All errors raised while discovering and registering modules derive from
:class:`ApplicationError`. None of them are recovered inside the loader, with
the single exception of :class:`CacheCorruptError`, which triggers a fresh
filesystem scan.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "ApplicationError",
    "CacheCorruptError",
    "ConfigurationError",
    "DirectoryHandlerNotFoundError",
    "InvalidModuleFileNameError",
    "ManifestInvalidError",
    "ManifestNotFoundError",
    "ModuleError",
)


class ApplicationError(Exception):
    """Base exception type for the module loader."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``ApplicationError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ConfigurationError(ApplicationError):
    """Raised when the modules configuration is invalid."""


class ModuleError(ApplicationError):
    """Base exception for module discovery and registration failures."""


class ManifestNotFoundError(ModuleError):
    """A module directory has no manifest file."""

    def __init__(self, module: str, manifest_file: str) -> None:
        self.module = module
        self.manifest_file = manifest_file
        super().__init__(f"The file {manifest_file} couldn't be found within the module {module} directory.")


class ManifestInvalidError(ModuleError):
    """A manifest file exists but does not hold a valid manifest object."""

    def __init__(self, module: str, reason: str) -> None:
        self.module = module
        super().__init__(f"Invalid manifest for module {module}: {reason}")


class DirectoryHandlerNotFoundError(ModuleError):
    """A configured category has no registered handler."""

    def __init__(self, handler: str) -> None:
        self.handler = handler
        super().__init__(f"Handler for the {handler} category couldn't be found.")


class CacheCorruptError(ModuleError):
    """The class map cache file could not be decoded into a file map."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Class map cache {path} is corrupt: {reason}")


class InvalidModuleFileNameError(ModuleError):
    """A module file name does not follow the naming convention."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"File {name} does not follow the naming convention: "
            "an uppercase letter followed by letters or digits, with a recognized extension."
        )
