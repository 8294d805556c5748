"""Module discovery, caching and registration."""

from modular.core._cache import CacheHit, CacheMiss, ClassMapCache
from modular.core._config import DEFAULT_DIR_STRUCTURE, ModulesConfig
from modular.core._explorer import Explorer, FileMap, Module
from modular.core._formatter import NameFormatter
from modular.core._handlers import CategoryHandler, ClassMapHandler, RoutesHandler, ViewsHandler
from modular.core._loader import ModuleLoader
from modular.core._manifest import Manifest, parse_manifest
from modular.core._plugin import ModulesPlugin
from modular.core._state import ModuleDiscoveryState

__all__ = [
    "DEFAULT_DIR_STRUCTURE",
    "CacheHit",
    "CacheMiss",
    "CategoryHandler",
    "ClassMapCache",
    "ClassMapHandler",
    "Explorer",
    "FileMap",
    "Manifest",
    "ModuleDiscoveryState",
    "ModuleLoader",
    "ModulesConfig",
    "ModulesPlugin",
    "NameFormatter",
    "RoutesHandler",
    "ViewsHandler",
    "parse_manifest",
    "reset_discovery_state",
]


def reset_discovery_state() -> None:
    """Reset the deferred discovery logging state."""
    ModuleDiscoveryState.reset()
