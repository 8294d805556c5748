"""Module manifest parsing."""

from __future__ import annotations

from typing import Any

import msgspec

from modular.lib.exceptions import ManifestInvalidError
from modular.lib.serialization import from_json


class Manifest(msgspec.Struct, frozen=True, kw_only=True):
    """A module's manifest.

    ``metadata`` holds the whole decoded JSON object, ``enabled`` included.
    """

    enabled: bool = False
    metadata: dict[str, Any] = {}


def parse_manifest(module: str, contents: bytes | str) -> Manifest:
    """Decode manifest file contents.

    Args:
        module: Module name used in error messages.
        contents: Raw manifest file contents.

    Raises:
        ManifestInvalidError: If the contents are not a JSON object or ``enabled`` is not a boolean.

    Returns:
        The parsed manifest.
    """
    try:
        raw = from_json(contents)
    except msgspec.DecodeError as e:
        raise ManifestInvalidError(module, str(e)) from e

    if not isinstance(raw, dict):
        raise ManifestInvalidError(module, "manifest root must be a JSON object")

    enabled = raw.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ManifestInvalidError(module, "'enabled' must be a boolean")

    return Manifest(enabled=enabled, metadata=raw)
