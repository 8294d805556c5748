from pathlib import Path

import msgspec
import pytest

from modular.lib.serialization import from_json, to_json


def test_to_json_basic() -> None:
    data = {"a": 1, "b": "test"}
    result = to_json(data)
    assert isinstance(result, bytes)
    assert from_json(result) == data


def test_to_json_bytes() -> None:
    data = b'{"a": 1}'
    assert to_json(data) == data


def test_to_json_path() -> None:
    result = to_json({"path": Path("/srv/modules")})
    assert b"/srv/modules" in result


def test_to_json_pretty() -> None:
    result = to_json({"Blog": {"Controllers": ["PostController.py"]}}, pretty=True)
    assert b"\n" in result
    assert from_json(result) == {"Blog": {"Controllers": ["PostController.py"]}}


def test_from_json_typed() -> None:
    assert from_json(b'{"Blog": {"Views": ["index.html"]}}', dict[str, dict[str, list[str]]]) == {
        "Blog": {"Views": ["index.html"]}
    }
    with pytest.raises(msgspec.ValidationError):
        from_json(b"[1, 2]", dict[str, dict[str, list[str]]])
