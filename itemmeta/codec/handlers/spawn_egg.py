from __future__ import annotations

from typing import Any

from itemmeta.codec.handlers.base import MetaHandler, compact_key
from itemmeta.models.keys import NamespacedKey
from itemmeta.models.meta import MetaKind, SpawnEggMeta, VariantMeta
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class SpawnEggHandler(MetaHandler):
    kind = MetaKind.SPAWN_EGG
    variant_name = "spawn egg"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, SpawnEggMeta) or meta.custom_entity_type is None:
            return
        item_data["customEntityType"] = compact_key(meta.custom_entity_type.namespaced_key)

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, SpawnEggMeta) or "customEntityType" not in item_data:
            return
        raw_type = item_data["customEntityType"]
        key = NamespacedKey.from_string(raw_type) if isinstance(raw_type, str) else None
        entity_type = self.registries.entity_types.get(key)
        if entity_type is None:
            logger.debug("Unknown spawn egg entity type left unset", entity_type=repr(raw_type))
            return
        meta.custom_entity_type = entity_type
