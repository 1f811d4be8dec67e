"""Persistent data tags ↔ the IR's ``persistent-data`` section."""

from __future__ import annotations

from typing import Any

from itemmeta.codec.type_utils import cast_as_map
from itemmeta.models.item import TaggedValue, TagType, tag_accepts
from itemmeta.models.keys import NamespacedKey
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

PERSISTENT_DATA_KEY = "persistent-data"


def serialize_tags(tags: dict[str, TaggedValue]) -> dict[str, dict[str, Any]]:
    """Write each tag as ``{type, value}`` keyed by its namespaced key."""
    serialized: dict[str, dict[str, Any]] = {}
    for key, tagged in tags.items():
        value = list(tagged.value) if isinstance(tagged.value, list) else tagged.value
        serialized[key] = {"type": str(tagged.tag), "value": value}
    return serialized


def deserialize_tags(raw: Any) -> dict[str, TaggedValue]:
    """
    Restore tags from the IR.

    Each entry is decoded independently: an unparseable key, an unknown tag
    type, or a value whose shape does not match its tag drops that one entry.
    """
    data = cast_as_map(raw, logger)
    if data is None:
        return {}

    tags: dict[str, TaggedValue] = {}
    for key, entry in data.items():
        namespaced_key = NamespacedKey.from_string(key)
        if namespaced_key is None:
            logger.debug("Skipping persistent tag with invalid key", key=key)
            continue
        value_map = cast_as_map(entry)
        if value_map is None or "type" not in value_map or "value" not in value_map:
            logger.debug("Skipping malformed persistent tag entry", key=key)
            continue
        try:
            tag = TagType(value_map["type"])
        except ValueError:
            logger.debug("Skipping persistent tag with unknown type", key=key, tag=value_map["type"])
            continue
        value = value_map["value"]
        if not tag_accepts(tag, value):
            logger.debug("Skipping persistent tag whose value does not match its type", key=key, tag=str(tag))
            continue
        tags[str(namespaced_key)] = TaggedValue(tag, list(value) if isinstance(value, list) else value)
    return tags
