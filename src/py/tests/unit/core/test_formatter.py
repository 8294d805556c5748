import os

import pytest

from modular.core import NameFormatter
from modular.lib.exceptions import InvalidModuleFileNameError


@pytest.fixture
def formatter() -> NameFormatter:
    return NameFormatter(root="/modules", namespace="Modules")


def test_format_identifier_strips_extension(formatter: NameFormatter) -> None:
    assert formatter.format_identifier(["Blog", "Controllers", "PostController.py"]) == (
        "Modules.Blog.Controllers.PostController"
    )


def test_format_identifier_backslash_separator() -> None:
    formatter = NameFormatter(root="/modules", namespace="Modules", separator="\\", extensions=("php", "hv"))
    assert formatter.format_identifier(["Blog", "Controllers", "PostController.php"]) == (
        "Modules\\Blog\\Controllers\\PostController"
    )
    assert formatter.format_identifier(["Blog", "Controllers", "PostController.hv"]) == (
        "Modules\\Blog\\Controllers\\PostController"
    )


@pytest.mark.parametrize(
    "name",
    ["postController.py", "Post_Controller.py", "P.py", "PostController.txt", "PostController"],
)
def test_non_conventional_names_pass_through(formatter: NameFormatter, name: str) -> None:
    assert formatter.format_identifier(["Blog", "Controllers", name]) == f"Modules.Blog.Controllers.{name}"


def test_only_last_segment_is_verified(formatter: NameFormatter) -> None:
    assert formatter.format_identifier(["Blog.py", "Controllers"]) == "Modules.Blog.py.Controllers"
    assert formatter.format_identifier(["Blog"]) == "Modules.Blog"
    assert formatter.format_identifier([]) == "Modules"


def test_format_path(formatter: NameFormatter) -> None:
    assert formatter.format_path(["Blog", "Views"]) == os.path.join("/modules", "Blog", "Views")
    assert formatter.format_path(["Blog", "Controllers", "postController.py"]) == os.path.join(
        "/modules", "Blog", "Controllers", "postController.py"
    )


def test_strict_rejects_module_files_breaking_convention() -> None:
    formatter = NameFormatter(root="/modules", namespace="Modules", strict=True)
    assert formatter.verify_name("PostController.py") == "PostController"
    assert formatter.verify_name("Blog") == "Blog"
    with pytest.raises(InvalidModuleFileNameError, match="postController.py"):
        formatter.verify_name("postController.py")
