"""Configuration for module discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from modular.lib.exceptions import ConfigurationError
from modular.utils.env import get_config_val

DEFAULT_DIR_STRUCTURE: dict[str, str] = {
    "views": "Views",
    "routes": "Routes",
    "entities": "Entities",
    "controllers": "Controllers",
}


@dataclass
class ModulesConfig:
    """Configuration for the modules loader.

    Attributes:
        path: Root directory under which module directories live.
        cache: Trust the persisted file map and skip the filesystem scan.
        namespace: Root segment prepended to every namespaced identifier.
        cache_file: File name of the persisted file map.
        cache_dir: Directory the cache file is resolved against.
        manifest_file: File name expected inside each module directory.
        dir_structure: Category name to literal subdirectory name.
        separator: Joins identifier segments. ``"."`` keeps identifiers importable.
        extensions: File extensions stripped from the last identifier segment.
        strict_names: Reject module files that do not follow the naming convention.
        log_discovered: Log discovered modules at startup.
    """

    path: Path = field(default_factory=lambda: Path("modules"))
    cache: bool = False
    namespace: str = "Modules"
    cache_file: str = "modules.json"
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))
    manifest_file: str = "manifest.json"
    dir_structure: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DIR_STRUCTURE))
    separator: str = "."
    extensions: tuple[str, ...] = ("py",)
    strict_names: bool = False
    log_discovered: bool = True

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.cache_dir = Path(self.cache_dir)
        self.extensions = tuple(ext.lstrip(".") for ext in self.extensions)
        self.dir_structure = {category.lower(): directory for category, directory in self.dir_structure.items()}

        if not self.namespace:
            msg = "namespace must not be empty"
            raise ConfigurationError(msg)
        if not self.separator:
            msg = "separator must not be empty"
            raise ConfigurationError(msg)
        if not self.manifest_file:
            msg = "manifest_file must not be empty"
            raise ConfigurationError(msg)
        if not self.cache_file:
            msg = "cache_file must not be empty"
            raise ConfigurationError(msg)
        if not self.extensions or not all(self.extensions):
            msg = "extensions must list at least one file extension"
            raise ConfigurationError(msg)
        if empty := sorted(category for category, directory in self.dir_structure.items() if not directory):
            msg = f"dir_structure has no directory for {', '.join(empty)}"
            raise ConfigurationError(msg)
        if "routes" in self.dir_structure and "controllers" not in self.dir_structure:
            msg = "dir_structure must define 'controllers' when 'routes' is defined"
            raise ConfigurationError(msg)

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / self.cache_file

    @classmethod
    def from_env(cls, prefix: str = "MODULES_") -> ModulesConfig:
        """Build a configuration from environment variables.

        Every field can be overridden with ``<prefix><FIELD_NAME>``, e.g.
        ``MODULES_PATH`` or ``MODULES_DIR_STRUCTURE=views=Views,routes=Routes``.

        Returns:
            The configuration.
        """
        defaults = cls()
        return cls(
            path=get_config_val(f"{prefix}PATH", default=defaults.path),
            cache=get_config_val(f"{prefix}CACHE", default=defaults.cache),
            namespace=get_config_val(f"{prefix}NAMESPACE", default=defaults.namespace),
            cache_file=get_config_val(f"{prefix}CACHE_FILE", default=defaults.cache_file),
            cache_dir=get_config_val(f"{prefix}CACHE_DIR", default=defaults.cache_dir),
            manifest_file=get_config_val(f"{prefix}MANIFEST_FILE", default=defaults.manifest_file),
            dir_structure=get_config_val(
                f"{prefix}DIR_STRUCTURE", default=defaults.dir_structure, type_hint=dict[str, str]
            ),
            separator=get_config_val(f"{prefix}SEPARATOR", default=defaults.separator),
            extensions=tuple(
                get_config_val(f"{prefix}EXTENSIONS", default=list(defaults.extensions), type_hint=list[str])
            ),
            strict_names=get_config_val(f"{prefix}STRICT_NAMES", default=defaults.strict_names),
            log_discovered=get_config_val(f"{prefix}LOG_DISCOVERED", default=defaults.log_discovered),
        )
