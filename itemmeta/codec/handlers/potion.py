"""Potion handler: display name, color, base type and custom effects."""

from __future__ import annotations

from typing import Any

from itemmeta.codec.capabilities import get_potion_name_accessor
from itemmeta.codec.handlers.base import MetaHandler, compact_key
from itemmeta.codec.type_utils import cast_as_map
from itemmeta.models.color import Color
from itemmeta.models.keys import NamespacedKey
from itemmeta.models.meta import MetaKind, PotionEffect, PotionMeta, VariantMeta
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

_DEFAULT_EFFECT = PotionEffect()


def _int_field(data: dict[str, Any], name: str, default: int) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


def _bool_field(data: dict[str, Any], name: str, default: bool) -> bool:
    value = data.get(name, default)
    return value if isinstance(value, bool) else default


class PotionHandler(MetaHandler):
    kind = MetaKind.POTION
    variant_name = "potion"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, PotionMeta):
            return

        accessor = get_potion_name_accessor(self._codec.version)
        custom_name = accessor.get(meta)
        if custom_name:
            item_data["customPotionName"] = custom_name
        if meta.color is not None:
            item_data["color"] = meta.color.serialize()
        if meta.base_type is not None:
            item_data["basePotionType"] = compact_key(meta.base_type.namespaced_key)
        if meta.effects:
            item_data["customEffects"] = {
                compact_key(effect_type.namespaced_key): {
                    "duration": effect.duration,
                    "amplifier": effect.amplifier,
                    "ambient": effect.ambient,
                    "particles": effect.particles,
                }
                for effect_type, effect in meta.effects.items()
            }

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, PotionMeta):
            return

        if isinstance(item_data.get("customPotionName"), str):
            get_potion_name_accessor(self._codec.version).set(meta, item_data["customPotionName"])
        if "color" in item_data:
            meta.color = Color.deserialize(item_data["color"])
        if "basePotionType" in item_data:
            raw_base = item_data["basePotionType"]
            key = NamespacedKey.from_string(raw_base) if isinstance(raw_base, str) else None
            meta.base_type = self.registries.potion_types.get(key)
            if meta.base_type is None:
                logger.debug("Unknown base potion type left unset", potion_type=repr(raw_base))

        effects = cast_as_map(item_data.get("customEffects"), logger) if "customEffects" in item_data else None
        for raw_id, raw_effect in (effects or {}).items():
            effect_type = self.registries.effect_types.get(NamespacedKey.from_string(raw_id))
            if effect_type is None:
                logger.debug("Skipping unknown potion effect", effect=raw_id)
                continue
            effect_data = cast_as_map(raw_effect)
            if effect_data is None:
                logger.debug("Skipping potion effect that is not a map", effect=raw_id)
                continue
            meta.effects[effect_type] = PotionEffect(
                duration=_int_field(effect_data, "duration", _DEFAULT_EFFECT.duration),
                amplifier=_int_field(effect_data, "amplifier", _DEFAULT_EFFECT.amplifier),
                ambient=_bool_field(effect_data, "ambient", _DEFAULT_EFFECT.ambient),
                particles=_bool_field(effect_data, "particles", _DEFAULT_EFFECT.particles),
            )
