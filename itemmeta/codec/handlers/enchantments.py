from __future__ import annotations

from typing import Any

from itemmeta.codec.handlers.base import MetaHandler
from itemmeta.codec.type_utils import cast_as_map
from itemmeta.models.keys import NamespacedKey
from itemmeta.models.meta import EnchantmentsMeta, EnchantmentStorageMeta, MetaKind, VariantMeta
from itemmeta.registry.models import EnchantmentEntry
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class _EnchantmentMapHandler(MetaHandler):
    ir_key: str

    def _write(self, enchants: dict[EnchantmentEntry, int], item_data: dict[str, Any]) -> None:
        if not enchants:
            return
        item_data[self.ir_key] = {entry.key: level for entry, level in enchants.items()}

    def _read(self, item_data: dict[str, Any]) -> dict[EnchantmentEntry, int]:
        if self.ir_key not in item_data:
            return {}
        raw = cast_as_map(item_data[self.ir_key], logger)
        if not raw:
            return {}

        enchants: dict[EnchantmentEntry, int] = {}
        for raw_key, level in raw.items():
            # Hand-written files often use bare upper-case names ("SHARPNESS").
            key = NamespacedKey.from_string(raw_key if ":" in raw_key else raw_key.lower())
            enchantment = self.registries.enchantments.get(key)
            if enchantment is None:
                logger.debug("Skipping unknown enchantment", enchantment=raw_key, variant=self.variant_name)
                continue
            if isinstance(level, bool) or not isinstance(level, int):
                logger.debug("Skipping enchantment with non-integer level", enchantment=raw_key, level=repr(level))
                continue
            enchants[enchantment] = level
        return enchants


class EnchantmentHandler(_EnchantmentMapHandler):
    kind = MetaKind.ENCHANTMENTS
    variant_name = "enchant"
    ir_key = "enchantments"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, EnchantmentsMeta):
            return
        self._write(meta.enchants, item_data)

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, EnchantmentsMeta):
            return
        meta.enchants.update(self._read(item_data))


class EnchantmentStorageHandler(_EnchantmentMapHandler):
    kind = MetaKind.ENCHANTMENT_STORAGE
    variant_name = "enchantment storage"
    ir_key = "enchantmentStorage"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, EnchantmentStorageMeta):
            return
        self._write(meta.stored_enchants, item_data)

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, EnchantmentStorageMeta):
            return
        meta.stored_enchants.update(self._read(item_data))
