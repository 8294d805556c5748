"""Module management CLI commands."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from modular.core import ModuleLoader, ModulesConfig

console = Console()


def _config(path: Path | None, cache_dir: Path | None) -> ModulesConfig:
    config = ModulesConfig.from_env()
    if path is not None:
        config.path = path
    if cache_dir is not None:
        config.cache_dir = cache_dir
    return config


path_option = click.option(
    "--path",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Modules directory. Defaults to MODULES_PATH.",
)
cache_dir_option = click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the class map cache. Defaults to MODULES_CACHE_DIR.",
)


@click.group(name="modules", invoke_without_command=False, help="Manage application modules.")
def modules_group() -> None:
    """Manage application modules."""


@modules_group.command(name="list", help="List enabled modules and their category directories.")
@path_option
def list_modules(path: Path | None) -> None:
    """List enabled modules."""
    config = _config(path, None)
    loader = ModuleLoader(config)
    file_map = loader.explorer.collect_files(config.dir_structure.values())

    table = Table(title=f"Modules in {config.path}")
    table.add_column("Module", style="cyan")
    table.add_column("Directory")
    table.add_column("Files", justify="right")
    for module, directories in file_map.items():
        for directory, files in directories.items():
            table.add_row(module, directory, str(len(files)))
    console.print(table)


@modules_group.group(name="cache", help="Manage the class map cache.")
def cache_group() -> None:
    """Manage the class map cache."""


@cache_group.command(name="build", help="Scan the modules directory and write the class map cache.")
@path_option
@cache_dir_option
def build_cache(path: Path | None, cache_dir: Path | None) -> None:
    """Rebuild the class map cache from a fresh scan."""
    config = _config(path, cache_dir)
    loader = ModuleLoader(config)
    file_map = loader.explorer.collect_files(config.dir_structure.values())
    loader.cache.write(file_map)
    console.print(f"[bold green]Wrote class map cache[/] {loader.cache.path} ({len(file_map)} modules)")


@cache_group.command(name="clear", help="Delete the class map cache.")
@cache_dir_option
def clear_cache(cache_dir: Path | None) -> None:
    """Delete the class map cache file."""
    config = _config(None, cache_dir)
    loader = ModuleLoader(config)
    if loader.cache.clear():
        console.print(f"[bold green]Deleted class map cache[/] {loader.cache.path}")
    else:
        console.print(f"[yellow]No class map cache at[/] {loader.cache.path}")
