from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from modular.core import Explorer
from modular.lib.exceptions import ManifestInvalidError, ManifestNotFoundError

DIRECTORIES = ["Views", "Routes", "Entities", "Controllers"]


def test_list_modules_creates_missing_root(tmp_path: Path) -> None:
    root = tmp_path / "missing" / "modules"
    explorer = Explorer(root)

    assert explorer.list_modules() == []
    assert root.is_dir()
    assert explorer.list_modules() == []


def test_list_modules_skips_private_directories(modules_root: Path, make_module: Callable[..., Path]) -> None:
    make_module("Blog")
    (modules_root / "__pycache__").mkdir()
    (modules_root / "README.md").write_text("")

    modules = Explorer(modules_root).list_modules()

    assert [module.name for module in modules] == ["Blog"]
    assert modules[0].path == str(modules_root / "Blog")


def test_list_modules_logs_skipped_directories(modules_root: Path, make_module: Callable[..., Path]) -> None:
    make_module("_Shared")

    with patch("modular.core._explorer.logger") as mock_logger:
        assert Explorer(modules_root).list_modules() == []

    mock_logger.debug.assert_called_once_with(
        "Skipping private module directory", directory=str(modules_root / "_Shared")
    )


def test_list_enabled_modules(modules_root: Path, make_module: Callable[..., Path]) -> None:
    make_module("Blog", enabled=True)
    make_module("Shop", enabled=False)
    make_module("Wiki", manifest={"name": "Wiki"})

    enabled = Explorer(modules_root).list_enabled_modules()

    assert [module.name for module in enabled] == ["Blog"]
    assert enabled[0].manifest.enabled is True


def test_missing_manifest_aborts_scan(modules_root: Path, make_module: Callable[..., Path]) -> None:
    make_module("Blog")
    make_module("Shop", manifest=None)

    with pytest.raises(ManifestNotFoundError, match="Shop") as exc_info:
        Explorer(modules_root).list_enabled_modules()

    assert exc_info.value.module == "Shop"
    assert exc_info.value.manifest_file == "manifest.json"


def test_custom_manifest_file(modules_root: Path, make_module: Callable[..., Path]) -> None:
    module = make_module("Blog", manifest=None)
    (module / "module.json").write_text('{"enabled": true}')

    assert Explorer(modules_root, manifest_file="module.json").read_manifest(module).enabled is True
    with pytest.raises(ManifestNotFoundError, match="manifest.json"):
        Explorer(modules_root).read_manifest(module)


def test_read_manifest_invalid_json(modules_root: Path, make_module: Callable[..., Path]) -> None:
    module = make_module("Blog", manifest=None)
    (module / "manifest.json").write_text("{")

    with pytest.raises(ManifestInvalidError):
        Explorer(modules_root).read_manifest(module)


def test_manifest_is_read_lazily_once() -> None:
    files = MagicMock()
    files.exists.return_value = True
    files.directories.return_value = ["/modules/Blog"]
    files.get.return_value = b'{"enabled": true}'

    modules = Explorer("/modules", files=files).list_modules()
    files.get.assert_not_called()

    assert modules[0].manifest.enabled is True
    assert modules[0].manifest.enabled is True
    files.get.assert_called_once()


def test_collect_files_end_to_end(modules_root: Path, make_module: Callable[..., Path]) -> None:
    make_module("Blog", files={"Controllers": {"PostController.py": ""}, "Views": None})

    assert Explorer(modules_root).collect_files(DIRECTORIES) == {"Blog": {"Controllers": ["PostController.py"]}}


def test_collect_files_omits_disabled_modules_and_empty_categories(
    modules_root: Path, make_module: Callable[..., Path]
) -> None:
    make_module(
        "Blog",
        files={
            "Controllers": {"PostController.py": "", "CommentController.py": ""},
            "Entities": {"Post.py": ""},
            "Routes": None,
            "Assets": {"app.css": ""},
        },
    )
    make_module("Shop", enabled=False, files={"Controllers": {"CartController.py": ""}})
    make_module("Wiki")

    file_map = Explorer(modules_root).collect_files(DIRECTORIES)

    assert file_map == {
        "Blog": {
            "Entities": ["Post.py"],
            "Controllers": ["CommentController.py", "PostController.py"],
        }
    }
    assert list(file_map["Blog"]) == ["Entities", "Controllers"]


def test_collect_files_is_not_recursive(modules_root: Path, make_module: Callable[..., Path]) -> None:
    module = make_module("Blog", files={"Controllers": None})
    (module / "Controllers" / "Admin").mkdir()
    (module / "Controllers" / "Admin" / "UserController.py").write_text("")

    assert Explorer(modules_root).collect_files(DIRECTORIES) == {}


def test_collect_files_uses_filesystem_listing_order() -> None:
    files = MagicMock()
    files.exists.return_value = True
    files.directories.return_value = ["/modules/Zeta", "/modules/Alpha"]
    files.get.return_value = b'{"enabled": true}'
    files.files.side_effect = lambda path: [f"{path}/Index.py"] if path.endswith("Controllers") else []

    file_map = Explorer("/modules", files=files).collect_files(["Controllers"])

    assert list(file_map) == ["Zeta", "Alpha"]
    assert file_map["Zeta"] == {"Controllers": ["Index.py"]}
