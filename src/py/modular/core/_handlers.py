"""Category handlers registering module files with the application."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from modular.core._formatter import NameFormatter
    from modular.lib.classloader import ClassLoader
    from modular.lib.routing import RouteGroup, RouteRegistrar
    from modular.lib.views import ViewNamespaceRegistry

__all__ = (
    "CategoryHandler",
    "ClassMapHandler",
    "RoutesHandler",
    "ViewsHandler",
)

logger = structlog.get_logger()


@runtime_checkable
class CategoryHandler(Protocol):
    """Registers the files of one module category."""

    def handle(self, module: str, category: str, files: Sequence[str]) -> None:
        """Register ``files`` found in ``module``'s ``category`` directory.

        Args:
            module: The module name.
            category: The directory name the files were found in.
            files: File names inside that directory.
        """
        ...


class ClassMapHandler:
    """Adds module class files to the class loader.

    Used for both controllers and entities.
    """

    __slots__ = ("class_loader", "formatter")

    def __init__(self, formatter: NameFormatter, class_loader: ClassLoader) -> None:
        self.formatter = formatter
        self.class_loader = class_loader

    def handle(self, module: str, category: str, files: Sequence[str]) -> None:
        classes: dict[str, str] = {}
        for file in files:
            segments = [module, category, _basename(file)]
            classes[self.formatter.format_identifier(segments)] = self.formatter.format_path(segments)
        self.class_loader.add_class_map(classes)
        logger.debug("Mapped module classes", module=module, category=category, classes=list(classes))


class RoutesHandler:
    """Runs a module's route files inside a route group.

    The group namespace points at the module's controllers directory so route
    files can reference controllers by bare name. Each file is imported under its
    identifier without the extension, e.g. ``Modules.Blog.Routes.web``.
    """

    __slots__ = ("controllers_directory", "formatter", "router")

    def __init__(self, formatter: NameFormatter, router: RouteRegistrar, controllers_directory: str) -> None:
        self.formatter = formatter
        self.router = router
        self.controllers_directory = controllers_directory

    def handle(self, module: str, category: str, files: Sequence[str]) -> None:
        namespace = self.formatter.format_identifier([module, self.controllers_directory])

        def register_routes(group: RouteGroup) -> None:
            for file in files:
                name = _basename(file)
                self.router.include(
                    group,
                    self.formatter.format_path([module, category, name]),
                    self.formatter.format_identifier([module, category, os.path.splitext(name)[0]]),
                )

        self.router.group(namespace, register_routes)


class ViewsHandler:
    """Registers a module's views directory as one template namespace."""

    __slots__ = ("formatter", "views")

    def __init__(self, formatter: NameFormatter, views: ViewNamespaceRegistry) -> None:
        self.formatter = formatter
        self.views = views

    def handle(self, module: str, category: str, files: Sequence[str]) -> None:
        self.views.add_namespace(
            self.formatter.format_identifier([module]),
            self.formatter.format_path([module, category]),
        )


def _basename(file: str) -> str:
    return file.replace("\\", "/").rsplit("/", 1)[-1]
