"""
Variant metadata blocks.

An item carries at most one variant; the variant's ``kind`` selects the
handler that reads and writes its IR keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, HttpUrl

from itemmeta.models.color import Color
from itemmeta.models.text import TextComponent

if TYPE_CHECKING:
    from itemmeta.models.item import Item
    from itemmeta.registry.models import EffectTypeEntry, EnchantmentEntry, EntityTypeEntry, PotionTypeEntry


class MetaKind(StrEnum):
    ENCHANTMENTS = "enchantments"
    ENCHANTMENT_STORAGE = "enchantment_storage"
    BOOK = "book"
    CROSSBOW = "crossbow"
    FIREWORK_EFFECT = "firework_effect"
    FIREWORK = "firework"
    LEATHER_ARMOR = "leather_armor"
    POTION = "potion"
    SKULL = "skull"
    SPAWN_EGG = "spawn_egg"


class FireworkEffectType(StrEnum):
    BALL = "BALL"
    BALL_LARGE = "BALL_LARGE"
    STAR = "STAR"
    BURST = "BURST"
    CREEPER = "CREEPER"


@dataclass
class VariantMeta:
    """Base class for the variant union."""

    kind: ClassVar[MetaKind]

    def is_empty(self) -> bool:
        """A variant with every field at its default contributes nothing to the IR."""
        return self == type(self)()


@dataclass
class EnchantmentsMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.ENCHANTMENTS

    enchants: dict[EnchantmentEntry, int] = field(default_factory=dict)


@dataclass
class EnchantmentStorageMeta(VariantMeta):
    """Enchantments stored in an enchanted book rather than applied to it."""

    kind: ClassVar[MetaKind] = MetaKind.ENCHANTMENT_STORAGE

    stored_enchants: dict[EnchantmentEntry, int] = field(default_factory=dict)


@dataclass
class BookMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.BOOK

    title: str | None = None
    author: str | None = None
    pages: list[TextComponent] = field(default_factory=list)


@dataclass
class CrossbowMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.CROSSBOW

    projectiles: list[Item] = field(default_factory=list)


@dataclass(frozen=True)
class FireworkEffect:
    type: FireworkEffectType
    flicker: bool = False
    trail: bool = False
    colors: tuple[Color, ...] = ()
    fade_colors: tuple[Color, ...] = ()


@dataclass
class FireworkEffectMeta(VariantMeta):
    """A single firework star effect."""

    kind: ClassVar[MetaKind] = MetaKind.FIREWORK_EFFECT

    effect: FireworkEffect | None = None


@dataclass
class FireworkMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.FIREWORK

    effects: list[FireworkEffect] = field(default_factory=list)
    power: int | None = None


@dataclass
class LeatherArmorMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.LEATHER_ARMOR

    color: Color | None = None


@dataclass(frozen=True)
class PotionEffect:
    """Custom effect parameters; the defaults are what a bare effect entry decodes to."""

    duration: int = 200
    amplifier: int = 0
    ambient: bool = False
    particles: bool = True


@dataclass
class PotionMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.POTION

    custom_potion_name: str | None = None
    color: Color | None = None
    base_type: PotionTypeEntry | None = None
    effects: dict[EffectTypeEntry, PotionEffect] = field(default_factory=dict)

    # Pre-1.21.4 hosts expose the potion name under this accessor pair.
    @property
    def custom_name(self) -> str | None:
        return self.custom_potion_name

    @custom_name.setter
    def custom_name(self, value: str | None) -> None:
        self.custom_potion_name = value


class PlayerProfile(BaseModel):
    """Profile rebuilt purely from a stored id and optional skin texture URL."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    texture_url: HttpUrl | None = None


@dataclass
class SkullMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.SKULL

    owner: UUID | None = None
    profile: PlayerProfile | None = None


@dataclass
class SpawnEggMeta(VariantMeta):
    kind: ClassVar[MetaKind] = MetaKind.SPAWN_EGG

    custom_entity_type: EntityTypeEntry | None = None


VARIANT_TYPES: dict[MetaKind, type[VariantMeta]] = {
    MetaKind.ENCHANTMENTS: EnchantmentsMeta,
    MetaKind.ENCHANTMENT_STORAGE: EnchantmentStorageMeta,
    MetaKind.BOOK: BookMeta,
    MetaKind.CROSSBOW: CrossbowMeta,
    MetaKind.FIREWORK_EFFECT: FireworkEffectMeta,
    MetaKind.FIREWORK: FireworkMeta,
    MetaKind.LEATHER_ARMOR: LeatherArmorMeta,
    MetaKind.POTION: PotionMeta,
    MetaKind.SKULL: SkullMeta,
    MetaKind.SPAWN_EGG: SpawnEggMeta,
}


def new_variant(kind: MetaKind) -> VariantMeta:
    """Create an empty variant of the given kind."""
    return VARIANT_TYPES[kind]()
