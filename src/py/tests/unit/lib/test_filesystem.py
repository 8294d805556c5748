from pathlib import Path

from modular.lib.filesystem import Filesystem, LocalFilesystem


def test_local_filesystem_is_a_filesystem() -> None:
    assert isinstance(LocalFilesystem(), Filesystem)


def test_directories_and_files_are_sorted_and_skip_hidden(tmp_path: Path) -> None:
    (tmp_path / "b").mkdir()
    (tmp_path / "a").mkdir()
    (tmp_path / ".git").mkdir()
    (tmp_path / "z.py").write_text("")
    (tmp_path / "y.py").write_text("")
    (tmp_path / ".DS_Store").write_text("")

    files = LocalFilesystem()

    assert files.directories(tmp_path) == [str(tmp_path / "a"), str(tmp_path / "b")]
    assert files.files(tmp_path) == [str(tmp_path / "y.py"), str(tmp_path / "z.py")]


def test_listing_missing_directory_is_empty(tmp_path: Path) -> None:
    files = LocalFilesystem()
    assert files.directories(tmp_path / "missing") == []
    assert files.files(tmp_path / "missing") == []


def test_files_is_not_recursive(tmp_path: Path) -> None:
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "Deep.py").write_text("")
    assert LocalFilesystem().files(tmp_path) == []


def test_put_get_delete(tmp_path: Path) -> None:
    files = LocalFilesystem()
    target = tmp_path / "cache" / "modules.json"

    files.put(target, b"{}")

    assert files.exists(target)
    assert files.get(target) == b"{}"
    assert files.delete(target) is True
    assert files.delete(target) is False
    assert not files.exists(target)


def test_make_directory_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"
    LocalFilesystem().make_directory(target)
    LocalFilesystem().make_directory(target)
    assert target.is_dir()
