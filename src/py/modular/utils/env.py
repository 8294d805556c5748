"""Environment variable parsing."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, TypeVar, cast

import msgspec

T = TypeVar("T")

TRUE_VALUES = {"true", "1", "yes", "y", "t", "on"}


def _parse_list(key: str, raw: str) -> list[str]:
    raw = raw.strip()
    if raw.startswith("["):
        try:
            value = msgspec.json.decode(raw)
        except msgspec.DecodeError as e:
            msg = f"{key} is not a valid list representation."
            raise ValueError(msg) from e
        if not isinstance(value, list):
            msg = f"{key} is not a valid list representation."
            raise ValueError(msg)
        return [str(item) for item in value]
    return [item.strip() for item in raw.split(",") if item.strip()]


def _parse_dict(key: str, raw: str) -> dict[str, str]:
    raw = raw.strip()
    if raw.startswith("{"):
        try:
            value = msgspec.json.decode(raw)
        except msgspec.DecodeError as e:
            msg = f"{key} is not a valid dict representation."
            raise TypeError(msg) from e
        if not isinstance(value, dict):
            msg = f"{key} is not a valid dict representation."
            raise TypeError(msg)
        return {str(k): str(v) for k, v in value.items()}
    result: dict[str, str] = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        if "=" not in pair:
            msg = f"{key} is not a valid dict representation."
            raise TypeError(msg)
        name, _, value = pair.partition("=")
        result[name.strip()] = value.strip()
    return result


def get_config_val(key: str, default: T, type_hint: Any = None) -> T:
    """Parse an environment variable into the type of its default.

    Args:
        key: Environment variable name.
        default: Returned when the variable is unset; its type drives parsing.
        type_hint: Explicit target type for container values (``list[str]``, ``dict[str, str]``).

    Raises:
        ValueError: If a list value cannot be parsed.
        TypeError: If a dict value cannot be parsed.

    Returns:
        The parsed value.
    """
    raw = os.environ.get(key)
    if raw is None:
        return default

    origin = getattr(type_hint, "__origin__", type_hint)
    if origin is list or (type_hint is None and isinstance(default, list)):
        return cast("T", _parse_list(key, raw))
    if origin is dict or (type_hint is None and isinstance(default, dict)):
        return cast("T", _parse_dict(key, raw))
    if isinstance(default, bool):
        return cast("T", raw.strip().lower() in TRUE_VALUES)
    if isinstance(default, int):
        return cast("T", int(raw))
    if isinstance(default, Path):
        return cast("T", Path(raw))
    return cast("T", raw)
