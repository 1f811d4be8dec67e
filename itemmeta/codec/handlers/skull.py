from __future__ import annotations

from typing import Any
from uuid import UUID

from itemmeta.codec.handlers.base import MetaHandler
from itemmeta.models.meta import MetaKind, PlayerProfile, SkullMeta, VariantMeta


class SkullHandler(MetaHandler):
    """
    Skull owner and player profile.

    Only the profile id and its skin URL are stored; the profile is rebuilt
    from those two values on decode.
    """

    kind = MetaKind.SKULL
    variant_name = "skull"

    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, SkullMeta):
            return
        if meta.owner is not None:
            item_data["owner"] = str(meta.owner)
        if meta.profile is not None:
            if meta.profile.texture_url is not None:
                item_data["profileUrl"] = str(meta.profile.texture_url)
            item_data["profile"] = str(meta.profile.id)

    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None:
        if not isinstance(meta, SkullMeta):
            return
        if "owner" in item_data:
            meta.owner = UUID(str(item_data["owner"]))
        if "profile" in item_data:
            meta.profile = PlayerProfile(
                id=UUID(str(item_data["profile"])),
                texture_url=item_data.get("profileUrl"),
            )
