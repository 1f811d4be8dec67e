from __future__ import annotations

from typing import Any

from itemmeta.codec.handlers.base import MetaHandler
from itemmeta.models.meta import CrossbowMeta, MetaKind, VariantMeta


class CrossbowHandler(MetaHandler):
    """
    Charged projectiles.

    The projectiles are full items, so they are encoded recursively through
    the codec's own list serializer and stored as one binary blob.
    """

    kind = MetaKind.CROSSBOW
    variant_name = "crossbow"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, CrossbowMeta) or not meta.projectiles:
            return
        item_data["projectiles"] = self._codec.serialize_item_list_to_bytes(meta.projectiles)

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, CrossbowMeta) or "projectiles" not in item_data:
            return
        raw_projectiles = item_data["projectiles"]
        if not isinstance(raw_projectiles, bytes):
            raise TypeError("Expected projectiles data to be a byte array.")
        meta.projectiles = self._codec.deserialize_item_list_from_bytes(raw_projectiles)
