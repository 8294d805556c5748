"""Module loader: builds the file map and dispatches it to category handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from modular.core._cache import CacheHit, ClassMapCache
from modular.core._explorer import Explorer
from modular.core._formatter import NameFormatter
from modular.core._handlers import ClassMapHandler, RoutesHandler, ViewsHandler
from modular.lib.classloader import ClassLoader
from modular.lib.exceptions import CacheCorruptError, DirectoryHandlerNotFoundError
from modular.lib.filesystem import LocalFilesystem
from modular.lib.routing import RouteRegistrar
from modular.lib.views import ViewNamespaceRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from modular.core._config import ModulesConfig
    from modular.core._explorer import FileMap
    from modular.core._handlers import CategoryHandler
    from modular.lib.filesystem import Filesystem

__all__ = ("ModuleLoader",)

logger = structlog.get_logger()


class ModuleLoader:
    """Registers the files of every enabled module with the application.

    The loader owns its configuration and the file map for the lifetime of
    the process. :meth:`map_module_files` is meant to run once at startup.
    """

    def __init__(
        self,
        config: ModulesConfig,
        *,
        files: Filesystem | None = None,
        explorer: Explorer | None = None,
        cache: ClassMapCache | None = None,
        class_loader: ClassLoader | None = None,
        router: RouteRegistrar | None = None,
        views: ViewNamespaceRegistry | None = None,
    ) -> None:
        self.config = config
        self.files = files or LocalFilesystem()
        self.explorer = explorer or Explorer(config.path, config.manifest_file, self.files)
        self.cache = cache or ClassMapCache(config.cache_path, self.files)
        self.class_loader = class_loader or ClassLoader(config.separator)
        self.router = router or RouteRegistrar(self.class_loader)
        self.views = views or ViewNamespaceRegistry()
        self.formatter = NameFormatter(
            root=config.path,
            namespace=config.namespace,
            separator=config.separator,
            extensions=config.extensions,
            strict=config.strict_names,
        )
        self.file_map: FileMap = {}
        self.from_cache = False
        self.mapped = False
        self.handlers: dict[str, CategoryHandler] = {}

        class_map_handler = ClassMapHandler(self.formatter, self.class_loader)
        self.register_handler("controllers", class_map_handler)
        self.register_handler("entities", class_map_handler)
        self.register_handler(
            "routes",
            RoutesHandler(self.formatter, self.router, config.dir_structure.get("controllers", "Controllers")),
        )
        self.register_handler("views", ViewsHandler(self.formatter, self.views))

    def register_handler(self, category: str, handler: CategoryHandler) -> None:
        """Register ``handler`` for ``category``, replacing any previous one."""
        self.handlers[category.lower()] = handler

    def build_file_map(self) -> FileMap:
        """Obtain the file map from the cache or a fresh scan.

        With caching enabled the cached map is used as is, even when empty. A
        corrupt cache file falls back to a scan and is left untouched.

        Returns:
            The file map.
        """
        directories = list(self.config.dir_structure.values())

        if not self.config.cache:
            self.file_map = self.explorer.collect_files(directories)
            self.from_cache = False
            return self.file_map

        try:
            result = self.cache.load()
        except CacheCorruptError as e:
            logger.warning("Ignoring corrupt class map cache", path=e.path, error=e.detail)
            self.file_map = self.explorer.collect_files(directories)
            self.from_cache = False
            return self.file_map

        self.file_map = result.file_map
        self.from_cache = True
        logger.debug(
            "Loaded class map cache",
            path=self.cache.path,
            hit=isinstance(result, CacheHit),
            modules=len(self.file_map),
        )
        return self.file_map

    def dispatch(self) -> None:
        """Route every module directory in the file map to its handler."""
        for module, directories in self.file_map.items():
            for directory, files in directories.items():
                self.route_category(module, directory, files)

    def map_module_files(self) -> FileMap:
        """Build the file map and register its files.

        Returns:
            The file map that was dispatched.
        """
        self.build_file_map()
        self.dispatch()
        self.mapped = True
        return self.file_map

    def resolve_category(self, directory: str) -> str | None:
        """Category configured for a module directory name.

        A directory matches a category when it equals the category name
        ignoring case, or equals the category's configured directory name.

        Returns:
            The category name, or ``None`` for an unrecognized directory.
        """
        lowered = directory.lower()
        for category, configured in self.config.dir_structure.items():
            if category == lowered or configured == directory:
                return category
        return None

    def route_category(self, module: str, directory: str, files: Sequence[str]) -> None:
        """Pass a module directory's files to its category handler.

        Raises:
            DirectoryHandlerNotFoundError: If the category has no handler.
        """
        category = self.resolve_category(directory)
        if category is None:
            logger.debug("Skipping unrecognized module directory", module=module, directory=directory)
            return

        handler = self.handlers.get(category)
        if handler is None:
            raise DirectoryHandlerNotFoundError(category)

        logger.debug("Dispatching module files", module=module, category=category, files=len(files))
        handler.handle(module, directory, files)

    def register_loader(self) -> None:
        """Install the class loader so mapped identifiers can be imported."""
        self.class_loader.install()

    def load_class(self, identifier: str) -> Any | None:
        """Import a mapped module file and return the class it is named after.

        Returns:
            The class, or ``None`` when ``identifier`` is not mapped.
        """
        return self.class_loader.resolve(identifier)
