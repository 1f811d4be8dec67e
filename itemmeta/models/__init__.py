"""Domain model: items, variant blocks and their value objects."""

from .color import Color
from .item import CustomModelData, Item, TaggedValue, TagType
from .keys import NamespacedKey
from .meta import (
    BookMeta,
    CrossbowMeta,
    EnchantmentsMeta,
    EnchantmentStorageMeta,
    FireworkEffect,
    FireworkEffectMeta,
    FireworkEffectType,
    FireworkMeta,
    LeatherArmorMeta,
    MetaKind,
    PlayerProfile,
    PotionEffect,
    PotionMeta,
    SkullMeta,
    SpawnEggMeta,
    VariantMeta,
)
from .text import TextComponent, TextComponentSerializer

__all__ = [
    "BookMeta",
    "Color",
    "CrossbowMeta",
    "CustomModelData",
    "EnchantmentStorageMeta",
    "EnchantmentsMeta",
    "FireworkEffect",
    "FireworkEffectMeta",
    "FireworkEffectType",
    "FireworkMeta",
    "Item",
    "LeatherArmorMeta",
    "MetaKind",
    "NamespacedKey",
    "PlayerProfile",
    "PotionEffect",
    "PotionMeta",
    "SkullMeta",
    "SpawnEggMeta",
    "TagType",
    "TaggedValue",
    "TextComponent",
    "TextComponentSerializer",
    "VariantMeta",
]
