"""
Encoding adapters between the IR and its text and binary forms.

Text is block-style YAML with a two-space indent; binary is MessagePack.
Both round-trip every IR value type, including raw ``bytes`` (YAML writes
them as ``!!binary``).
"""

from __future__ import annotations

from typing import Any

import msgpack
import yaml

from itemmeta.exceptions import EncodingError, EncodingShapeError
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

YAML = "yaml"
BINARY = "binary"


def dump_yaml(data: Any) -> str:
    """
    Render an IR value as YAML text.

    Raises:
        EncodingError: If the value holds something YAML cannot represent
    """
    try:
        return yaml.safe_dump(
            data,
            default_flow_style=False,
            indent=2,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as exc:
        raise EncodingError(f"Failed to write YAML: {exc}", encoding=YAML) from exc


def load_yaml(text: str) -> Any:
    """
    Parse YAML text into an IR value; an empty document yields None.

    Raises:
        EncodingError: If the text is not valid YAML
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise EncodingError(f"Failed to read YAML: {exc}", encoding=YAML) from exc


def pack_binary(data: Any) -> bytes:
    """
    Encode an IR value as MessagePack.

    Raises:
        EncodingError: If the value holds something MessagePack cannot represent
    """
    try:
        return msgpack.packb(data, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as exc:
        raise EncodingError(f"Failed to write binary payload: {exc}", encoding=BINARY) from exc


def unpack_binary(blob: bytes) -> Any:
    """
    Decode a MessagePack payload.

    Raises:
        EncodingError: If the payload is empty, truncated or otherwise undecodable
    """
    if not isinstance(blob, bytes | bytearray | memoryview):
        raise EncodingError(f"Binary payload must be bytes, got {type(blob).__name__}", encoding=BINARY)
    try:
        return msgpack.unpackb(blob, raw=False)
    except (ValueError, TypeError, msgpack.exceptions.UnpackException) as exc:
        raise EncodingError(f"Failed to read binary payload: {exc}", encoding=BINARY) from exc


def _shape_name(value: Any) -> str:
    if isinstance(value, dict):
        return "map"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


def expect_map(value: Any, encoding: str) -> dict[str, Any]:
    """
    Require a decoded top-level value to be a string-keyed map.

    Raises:
        EncodingShapeError: Otherwise
    """
    if not isinstance(value, dict) or not all(isinstance(key, str) for key in value):
        raise EncodingShapeError(
            "Top-level value is not a map",
            encoding=encoding,
            expected="map",
            actual=_shape_name(value),
        )
    return value


def expect_list_of_maps(value: Any, encoding: str) -> list[dict[str, Any]]:
    """
    Require a decoded top-level value to be a list whose every element is a map.

    Raises:
        EncodingShapeError: Otherwise
    """
    if not isinstance(value, list):
        raise EncodingShapeError(
            "Top-level value is not a list",
            encoding=encoding,
            expected="list of maps",
            actual=_shape_name(value),
        )
    for index, element in enumerate(value):
        if not isinstance(element, dict):
            raise EncodingShapeError(
                f"List element {index} is not a map",
                encoding=encoding,
                expected="list of maps",
                actual=f"list containing {_shape_name(element)}",
            )
    return value
