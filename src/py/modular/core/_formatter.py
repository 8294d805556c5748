"""Filesystem path and namespaced identifier formatting."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from modular.lib.exceptions import InvalidModuleFileNameError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path


def build_name_pattern(extensions: Iterable[str]) -> re.Pattern[str]:
    """Pattern catching a file name without its extension.

    The name must begin with an uppercase letter followed by letters or
    digits, and carry one of ``extensions``: ``PostController.py`` matches,
    ``postController.py`` does not.
    """
    alternatives = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(rf"^([A-Z][a-zA-Z0-9]+)\.(?:{alternatives})$")


class NameFormatter:
    """Builds module file paths and namespaced identifiers from path segments."""

    __slots__ = ("_extension_pattern", "namespace", "pattern", "root", "separator", "strict")

    def __init__(
        self,
        root: str | Path,
        namespace: str,
        separator: str = ".",
        extensions: Sequence[str] = ("py",),
        strict: bool = False,
    ) -> None:
        self.root = str(root)
        self.namespace = namespace
        self.separator = separator
        self.strict = strict
        self.pattern = build_name_pattern(extensions)
        self._extension_pattern = re.compile(rf"\.(?:{'|'.join(re.escape(ext) for ext in extensions)})$")

    def format_path(self, segments: Sequence[str]) -> str:
        return os.path.join(self.root, *segments)

    def format_identifier(self, segments: Sequence[str]) -> str:
        """Join the namespace and ``segments`` into an identifier.

        The last segment goes through :meth:`verify_name` first.

        Args:
            segments: Path segments, e.g. ``["Blog", "Controllers", "PostController.py"]``.

        Returns:
            The namespaced identifier, e.g. ``Modules.Blog.Controllers.PostController``.
        """
        buffer = [self.namespace, *segments]
        buffer[-1] = self.verify_name(buffer[-1])
        return self.separator.join(buffer)

    def verify_name(self, name: str) -> str:
        """Strip the extension from a conventionally named file.

        Names that do not match pass through unchanged, unless the formatter is
        strict and the name carries one of the recognized extensions.

        Raises:
            InvalidModuleFileNameError: In strict mode, for a module file breaking the convention.

        Returns:
            The bare name, or ``name`` unchanged.
        """
        if match := self.pattern.match(name):
            return match.group(1)
        if self.strict and self._extension_pattern.search(name):
            raise InvalidModuleFileNameError(name)
        return name
