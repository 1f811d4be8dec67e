"""
Decode-safety helpers.

YAML and MessagePack both hand back weakly-typed trees. These helpers view a
decoded value as a list, a string-keyed map, or a list of such maps, returning
None instead of raising when the shape does not match.
"""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")


def _type_name(obj: Any) -> str:
    return type(obj).__name__


def cast_as_list(obj: Any, logger: Any = None, item_type: type[T] | tuple[type, ...] | None = None) -> list[T] | None:
    """
    View ``obj`` as a list, optionally keeping only elements of ``item_type``.

    None elements (and elements of the wrong type) are skipped with a warning
    rather than failing the whole list.

    Args:
        obj: Decoded value
        logger: Optional structlog logger for shape warnings
        item_type: Element type (or tuple of types) to keep

    Returns:
        A new list, or None when ``obj`` is not a list
    """
    if not isinstance(obj, list):
        if logger is not None:
            logger.warning("Expected list", actual=_type_name(obj))
        return None

    result: list[T] = []
    for index, item in enumerate(obj):
        if item is None:
            if logger is not None:
                logger.warning("Found null item in list, skipping", index=index)
            continue
        if item_type is not None and not isinstance(item, item_type):
            if logger is not None:
                logger.warning("Unexpected list item type, skipping", index=index, actual=_type_name(item))
            continue
        result.append(item)
    return result


def cast_as_map(obj: Any, logger: Any = None) -> dict[str, Any] | None:
    """
    View ``obj`` as a string-keyed map.

    Returns:
        ``obj`` itself when it is a dict with only string keys, otherwise None
    """
    if not isinstance(obj, dict):
        if logger is not None:
            logger.warning("Expected map", actual=_type_name(obj))
        return None
    if not all(isinstance(key, str) for key in obj):
        if logger is not None:
            logger.warning("Expected string keys in map", keys=[repr(key) for key in obj][:10])
        return None
    return obj


def cast_as_list_of_maps(obj: Any, logger: Any = None) -> list[dict[str, Any]] | None:
    """
    View ``obj`` as a list of string-keyed maps.

    None elements and elements that are not string-keyed maps are skipped
    with a warning.

    Returns:
        A new list of maps, or None when ``obj`` is not a list
    """
    if not isinstance(obj, list):
        if logger is not None:
            logger.warning("Expected list", actual=_type_name(obj))
        return None

    result: list[dict[str, Any]] = []
    for index, item in enumerate(obj):
        if item is None:
            if logger is not None:
                logger.warning("Found null item in list, skipping", index=index)
            continue
        mapping = cast_as_map(item)
        if mapping is None:
            if logger is not None:
                logger.warning("Expected map in list, skipping", index=index, actual=_type_name(item))
            continue
        result.append(mapping)
    return result
