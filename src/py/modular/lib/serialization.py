"""JSON encoding and decoding helpers."""

from __future__ import annotations

from pathlib import PurePath
from typing import Any, TypeVar, overload

import msgspec

T = TypeVar("T")


def _default(value: Any) -> str:
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return str(sorted(value))
    return str(value)


_msgspec_json_encoder = msgspec.json.Encoder(enc_hook=_default)
_msgspec_json_decoder = msgspec.json.Decoder()


def to_json(value: Any, pretty: bool = False) -> bytes:
    """Encode json with the optimized msgspec package.

    Args:
        value: The value to encode. Bytes are returned unchanged.
        pretty: Indent the output for human readers.

    Returns:
        The encoded JSON document.
    """
    if isinstance(value, bytes):
        return value
    encoded = _msgspec_json_encoder.encode(value)
    if pretty:
        return msgspec.json.format(encoded, indent=2)
    return encoded


@overload
def from_json(value: bytes | str) -> Any: ...


@overload
def from_json(value: bytes | str, type_: type[T]) -> T: ...


def from_json(value: bytes | str, type_: Any = None) -> Any:
    """Decode json with the optimized msgspec package.

    Args:
        value: The document to decode.
        type_: Optional type the document is validated against.

    Returns:
        The decoded value.
    """
    if type_ is None:
        return _msgspec_json_decoder.decode(value)
    return msgspec.json.decode(value, type=type_)
