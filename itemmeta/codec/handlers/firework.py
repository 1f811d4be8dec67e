"""Firework star and firework rocket handlers."""

from __future__ import annotations

from typing import Any

from itemmeta.codec.handlers.base import MetaHandler, deserialize_colors, serialize_colors
from itemmeta.codec.type_utils import cast_as_list, cast_as_list_of_maps, cast_as_map
from itemmeta.models.meta import (
    FireworkEffect,
    FireworkEffectMeta,
    FireworkEffectType,
    FireworkMeta,
    MetaKind,
    VariantMeta,
)
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


def serialize_effect(effect: FireworkEffect) -> dict[str, Any]:
    return {
        "type": str(effect.type),
        "flicker": effect.flicker,
        "trail": effect.trail,
        "colors": serialize_colors(effect.colors),
        "fadeColors": serialize_colors(effect.fade_colors),
    }


def deserialize_effect(effect_data: dict[str, Any]) -> FireworkEffect:
    """
    Rebuild one effect.

    Raises:
        ValueError: If the effect type is missing or unknown, or a color is malformed
    """
    raw_type = effect_data.get("type")
    if not isinstance(raw_type, str):
        raise ValueError(f"Firework effect type missing or not a string: {raw_type!r}")
    effect_type = FireworkEffectType(raw_type.upper())
    return FireworkEffect(
        type=effect_type,
        flicker=effect_data.get("flicker") is True,
        trail=effect_data.get("trail") is True,
        colors=deserialize_colors(cast_as_list(effect_data.get("colors", []), logger, item_type=str)),
        fade_colors=deserialize_colors(cast_as_list(effect_data.get("fadeColors", []), logger, item_type=str)),
    )


class FireworkEffectHandler(MetaHandler):
    kind = MetaKind.FIREWORK_EFFECT
    variant_name = "firework effect"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, FireworkEffectMeta) or meta.effect is None:
            return
        item_data["effect"] = serialize_effect(meta.effect)

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, FireworkEffectMeta) or "effect" not in item_data:
            return
        effect_data = cast_as_map(item_data["effect"], logger)
        if effect_data is None:
            return
        meta.effect = deserialize_effect(effect_data)


class FireworkHandler(MetaHandler):
    kind = MetaKind.FIREWORK
    variant_name = "firework"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, FireworkMeta):
            return
        if meta.effects:
            item_data["effects"] = [serialize_effect(effect) for effect in meta.effects]
        if meta.power is not None:
            item_data["power"] = meta.power

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, FireworkMeta):
            return
        if "effects" in item_data:
            effects = cast_as_list_of_maps(item_data["effects"], logger) or []
            meta.effects.extend(deserialize_effect(effect_data) for effect_data in effects)
        power = item_data.get("power")
        if isinstance(power, int) and not isinstance(power, bool):
            meta.power = power
