from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

import msgspec
import pytest

from modular.core import ModuleDiscoveryState, ModulesConfig
from modular.lib.classloader import ClassLoader

if TYPE_CHECKING:
    from collections.abc import Callable, Generator
    from pathlib import Path

MODULE_NAMESPACES = ("Modules", "Plugins")


@pytest.fixture(autouse=True)
def _isolate_imports() -> Generator[None, None, None]:
    """Drop class loaders and imported module files between tests."""
    yield
    for finder in [finder for finder in sys.meta_path if isinstance(finder, ClassLoader)]:
        sys.meta_path.remove(finder)
    for name in [name for name in sys.modules if name.startswith(MODULE_NAMESPACES)]:
        del sys.modules[name]
    ModuleDiscoveryState.reset()


@pytest.fixture
def modules_root(tmp_path: Path) -> Path:
    root = tmp_path / "modules"
    root.mkdir()
    return root


@pytest.fixture
def make_module(modules_root: Path) -> Callable[..., Path]:
    """Create a module directory.

    ``files`` maps a category directory to ``{file name: contents}``; a ``None``
    mapping creates the directory empty. ``manifest=None`` skips the manifest.
    """

    def _make(
        name: str,
        *,
        enabled: bool = True,
        manifest: dict[str, Any] | None | bool = True,
        files: dict[str, dict[str, str] | None] | None = None,
    ) -> Path:
        module = modules_root / name
        module.mkdir()
        if manifest is True:
            (module / "manifest.json").write_bytes(msgspec.json.encode({"enabled": enabled}))
        elif isinstance(manifest, dict):
            (module / "manifest.json").write_bytes(msgspec.json.encode(manifest))
        for directory, contents in (files or {}).items():
            target = module / directory
            target.mkdir()
            for file_name, text in (contents or {}).items():
                (target / file_name).write_text(text)
        return module

    return _make


@pytest.fixture
def config(modules_root: Path, tmp_path: Path) -> ModulesConfig:
    return ModulesConfig(path=modules_root, cache_dir=tmp_path / "cache")
