"""Common contract for variant handlers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from itemmeta.models.color import Color
from itemmeta.models.keys import MINECRAFT_NAMESPACE, NamespacedKey
from itemmeta.models.meta import MetaKind, VariantMeta

if TYPE_CHECKING:
    from itemmeta.codec.item_codec import ItemCodec


class MetaHandler(ABC):
    """
    Reads and writes one variant's IR keys.

    Both methods are no-ops when ``meta`` is not this handler's variant or
    has nothing to contribute. Errors propagate to the codec, which isolates
    them per handler call.
    """

    kind: MetaKind
    variant_name: str

    def __init__(self, codec: ItemCodec):
        self._codec = codec

    @property
    def registries(self):
        return self._codec.registries

    @property
    def text(self):
        return self._codec.text_serializer

    def handles(self, meta: VariantMeta | None) -> bool:
        return meta is not None and meta.kind is self.kind

    @abstractmethod
    def serialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None: ...

    @abstractmethod
    def deserialize(self, meta: VariantMeta, item_data: dict[str, Any]) -> None: ...


def compact_key(key: NamespacedKey) -> str:
    """Vanilla ids are stored as their bare path, anything else in full."""
    if key.namespace == MINECRAFT_NAMESPACE:
        return key.key
    return str(key)


def serialize_colors(colors) -> list[str]:
    return [color.serialize() for color in colors]


def deserialize_colors(raw_colors: list[str] | None) -> tuple[Color, ...]:
    if raw_colors is None:
        return ()
    return tuple(Color.deserialize(raw) for raw in raw_colors)
