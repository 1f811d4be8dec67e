"""
Runtime item model.

An Item is a stack of one material plus optional common metadata (display
text, damage, persistent tags, model data) and at most one variant block.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from itemmeta.exceptions import InvalidItemError
from itemmeta.models.color import Color
from itemmeta.models.keys import NamespacedKey
from itemmeta.models.meta import VariantMeta
from itemmeta.models.text import TextComponent

if TYPE_CHECKING:
    from itemmeta.registry.models import MaterialEntry


class TagType(StrEnum):
    STRING = "STRING"
    INTEGER = "INTEGER"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    LONG = "LONG"
    BYTE = "BYTE"
    BYTE_ARRAY = "BYTE_ARRAY"
    INTEGER_ARRAY = "INTEGER_ARRAY"
    LONG_ARRAY = "LONG_ARRAY"
    SHORT = "SHORT"
    BOOLEAN = "BOOLEAN"


_INTEGER_BITS: dict[TagType, int] = {
    TagType.BYTE: 8,
    TagType.SHORT: 16,
    TagType.INTEGER: 32,
    TagType.LONG: 64,
    TagType.INTEGER_ARRAY: 32,
    TagType.LONG_ARRAY: 64,
}


def _is_signed_int(value: Any, bits: int) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    limit = 1 << (bits - 1)
    return -limit <= value < limit


def tag_accepts(tag: TagType, value: Any) -> bool:
    """Whether ``value`` has the Python shape the tag discriminant requires."""
    match tag:
        case TagType.STRING:
            return isinstance(value, str)
        case TagType.BOOLEAN:
            return isinstance(value, bool)
        case TagType.DOUBLE | TagType.FLOAT:
            return isinstance(value, float)
        case TagType.BYTE_ARRAY:
            return isinstance(value, bytes)
        case TagType.INTEGER_ARRAY | TagType.LONG_ARRAY:
            bits = _INTEGER_BITS[tag]
            return isinstance(value, list) and all(_is_signed_int(item, bits) for item in value)
        case TagType.BYTE | TagType.SHORT | TagType.INTEGER | TagType.LONG:
            return _is_signed_int(value, _INTEGER_BITS[tag])
    return False


@dataclass(frozen=True)
class TaggedValue:
    """A persistent data value together with the tag that selects its codec path."""

    tag: TagType
    value: Any

    def __post_init__(self) -> None:
        if not tag_accepts(self.tag, self.value):
            raise ValueError(f"Value {self.value!r} does not match tag {self.tag}")

    @classmethod
    def string(cls, value: str) -> TaggedValue:
        return cls(TagType.STRING, value)

    @classmethod
    def integer(cls, value: int) -> TaggedValue:
        return cls(TagType.INTEGER, value)


@dataclass
class CustomModelData:
    """The structured model data component used by 1.21.5+ hosts."""

    floats: list[float] = field(default_factory=list)
    flags: list[bool] = field(default_factory=list)
    strings: list[str] = field(default_factory=list)
    colors: list[Color] = field(default_factory=list)


def _normalise_tag_keys(tags: dict[str, TaggedValue]) -> dict[str, TaggedValue]:
    normalised: dict[str, TaggedValue] = {}
    for raw_key, tagged in tags.items():
        key = NamespacedKey.from_string(raw_key)
        if key is None:
            raise InvalidItemError(f"Invalid persistent tag key: {raw_key!r}", field="tags")
        normalised[str(key)] = tagged
    return normalised


@dataclass
class Item:  # pylint: disable=too-many-instance-attributes  # Reason: Item carries every common attribute the codec round-trips
    """A stack of one material with optional metadata."""

    type: MaterialEntry
    quantity: int = 1
    name: TextComponent | None = None
    lore: list[TextComponent] | None = None
    durability: int | None = None
    legacy_model_data: int | None = None
    model_data: CustomModelData | None = None
    tags: dict[str, TaggedValue] = field(default_factory=dict)
    variant: VariantMeta | None = None

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise InvalidItemError("Quantity must be a positive integer.", field="quantity")
        if self.variant is not None and self.variant.kind is not self.type.meta_kind:
            raise InvalidItemError(
                f"Material {self.type.key} carries {self.type.meta_kind} metadata, not {self.variant.kind}",
                field="variant",
            )
        if self.durability is not None and not self.type.damageable:
            raise InvalidItemError(f"Material {self.type.key} cannot take damage", field="durability")
        self.tags = _normalise_tag_keys(self.tags)

    @property
    def carries_meta(self) -> bool:
        """Whether the material supports metadata at all (AIR and friends do not)."""
        return self.type.meta_kind is not None

    @property
    def effective_model_data(self) -> CustomModelData | None:
        """
        The model data component a 1.21.5+ host renders.

        An item that only carries the legacy integer migrates to a component
        holding that value as its single float.
        """
        if self.model_data is not None:
            return self.model_data
        if self.legacy_model_data is not None:
            return CustomModelData(floats=[float(self.legacy_model_data)])
        return None
