"""Modules plugin implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from litestar.plugins import CLIPluginProtocol, InitPluginProtocol

from modular.core._config import ModulesConfig
from modular.core._loader import ModuleLoader
from modular.core._state import ModuleDiscoveryState

if TYPE_CHECKING:
    from click import Group
    from litestar.config.app import AppConfig

logger = structlog.get_logger()


class ModulesPlugin(InitPluginProtocol, CLIPluginProtocol):
    """Litestar plugin loading modules from the modules directory.

    On application init it:
    - maps controller and entity files into the class loader and installs it
    - runs route files and registers one router per module
    - serves module views through a Jinja template config
    """

    __slots__ = ("config", "loader")

    def __init__(self, config: ModulesConfig | None = None, loader: ModuleLoader | None = None) -> None:
        """Initialize the modules plugin.

        Args:
            config: Plugin configuration. If None, read from the environment.
            loader: A prepared loader. If None, one is built from ``config`` on first use.
        """
        self.config = config or (loader.config if loader is not None else ModulesConfig.from_env())
        self.loader = loader

    def on_cli_init(self, cli: Group) -> None:
        from modular.cli.commands import modules_group

        cli.add_command(modules_group)

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Register module files with the application being created.

        Modules are discovered once per plugin instance; later apps reuse the
        same registrations.

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        if self.loader is None:
            self.loader = ModuleLoader(self.config)
        self.loader.register_loader()
        if not self.loader.mapped:
            self.loader.map_module_files()
            ModuleDiscoveryState.record(self.loader)

        app_config.route_handlers.extend(self.loader.router.routers())
        self._register_views(app_config)

        # Register startup hook for deferred logging
        if self.config.log_discovered:
            app_config.on_startup = app_config.on_startup or []
            app_config.on_startup.insert(0, _on_startup_log_discovery)

        return app_config

    def _register_views(self, app_config: AppConfig) -> None:
        if self.loader is None or not (namespaces := self.loader.views.namespaces):
            return
        if app_config.template_config is not None:
            logger.warning("Template config already set, module views not registered", namespaces=list(namespaces))
            return
        app_config.template_config = self.loader.views.template_config()


def _on_startup_log_discovery() -> None:
    """Lifespan startup hook to log discovery results after server header."""
    ModuleDiscoveryState.log_discovery_results()
