"""View template namespaces for module view directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, PrefixLoader, select_autoescape
from litestar.plugins.jinja import JinjaTemplateEngine
from litestar.template.config import TemplateConfig

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ("NAMESPACE_DELIMITER", "ViewNamespaceRegistry")

NAMESPACE_DELIMITER = "::"


class ViewNamespaceRegistry:
    """Maps view namespaces to template directories.

    Templates are addressed as ``"<namespace>::<template>"``, for example
    ``"Modules.Blog::posts/index.html"``.
    """

    def __init__(self) -> None:
        self._namespaces: dict[str, list[str]] = {}

    def add_namespace(self, identifier: str, path: str | Path) -> None:
        self._namespaces.setdefault(identifier, []).append(str(path))

    @property
    def namespaces(self) -> dict[str, list[str]]:
        return {identifier: list(paths) for identifier, paths in self._namespaces.items()}

    def loader(self) -> PrefixLoader:
        return PrefixLoader(
            {identifier: FileSystemLoader(paths) for identifier, paths in self._namespaces.items()},
            delimiter=NAMESPACE_DELIMITER,
        )

    def environment(self) -> Environment:
        return Environment(loader=self.loader(), autoescape=select_autoescape())

    def template_config(self) -> TemplateConfig:
        """Litestar template configuration serving every registered namespace."""
        return TemplateConfig(instance=JinjaTemplateEngine.from_environment(self.environment()))
