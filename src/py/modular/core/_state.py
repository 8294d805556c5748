"""Discovery results kept for deferred logging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from modular.core._loader import ModuleLoader

logger = structlog.get_logger()


class ModuleDiscoveryState:
    """Store discovery results for deferred logging during lifespan startup."""

    # Discovery results (populated during on_app_init)
    module_count: int = 0
    categories_by_module: dict[str, list[str]] = {}
    class_count: int = 0
    route_group_count: int = 0
    view_namespace_count: int = 0
    from_cache: bool = False

    # Logging flag (prevents duplicate logs across app creations)
    logged_modules: bool = False

    @classmethod
    def reset(cls) -> None:
        """Reset discovery state (for testing)."""
        cls.module_count = 0
        cls.categories_by_module = {}
        cls.class_count = 0
        cls.route_group_count = 0
        cls.view_namespace_count = 0
        cls.from_cache = False
        cls.logged_modules = False

    @classmethod
    def record(cls, loader: ModuleLoader) -> None:
        """Copy the results of a finished :meth:`ModuleLoader.map_module_files` run."""
        cls.module_count = len(loader.file_map)
        cls.categories_by_module = {module: list(directories) for module, directories in loader.file_map.items()}
        cls.class_count = len(loader.class_loader.class_map)
        cls.route_group_count = len(loader.router.groups)
        cls.view_namespace_count = len(loader.views.namespaces)
        cls.from_cache = loader.from_cache

    @classmethod
    def log_discovery_results(cls) -> None:
        """Log discovery results (called during lifespan startup)."""
        if cls.logged_modules:
            return
        cls.logged_modules = True
        if cls.module_count == 0:
            logger.warning("No modules discovered", from_cache=cls.from_cache)
            return
        logger.info(
            "Discovered modules",
            modules=cls.module_count,
            classes=cls.class_count,
            route_groups=cls.route_group_count,
            view_namespaces=cls.view_namespace_count,
            from_cache=cls.from_cache,
            by_module={k: sorted(v) for k, v in sorted(cls.categories_by_module.items())},
        )
