from __future__ import annotations

from typing import Any

from itemmeta.codec.handlers.base import MetaHandler
from itemmeta.models.color import Color
from itemmeta.models.meta import LeatherArmorMeta, MetaKind, VariantMeta


class LeatherArmorHandler(MetaHandler):
    kind = MetaKind.LEATHER_ARMOR
    variant_name = "leather armor"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, LeatherArmorMeta) or meta.color is None:
            return
        item_data["color"] = meta.color.serialize()

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, LeatherArmorMeta) or "color" not in item_data:
            return
        meta.color = Color.deserialize(item_data["color"])
