"""Validated registry entry models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from itemmeta.models.keys import NamespacedKey
from itemmeta.models.meta import MetaKind


class MaterialEntry(BaseModel):
    """
    An item type.

    ``meta_kind`` names the variant block items of this material carry; a
    material without one (AIR) carries no metadata at all.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(min_length=1, max_length=120)
    meta_kind: MetaKind | None = None
    max_durability: int = Field(default=0, ge=0)
    max_stack: int = Field(default=64, ge=1, le=99)

    @field_validator("key")
    @classmethod
    def validate_key(cls, value: str) -> str:
        normalised = value.strip().upper()
        if not normalised.replace("_", "").isalnum():
            raise ValueError(f"Material key must be an upper-case enum name, got '{value}'")
        return normalised

    @property
    def damageable(self) -> bool:
        return self.max_durability > 0


class KeyedEntry(BaseModel):
    """A registry entry addressed by a namespaced key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str

    @field_validator("key")
    @classmethod
    def validate_key(cls, value: str) -> str:
        parsed = NamespacedKey.from_string(value)
        if parsed is None:
            raise ValueError(f"Invalid namespaced key: '{value}'")
        return str(parsed)

    @property
    def namespaced_key(self) -> NamespacedKey:
        namespace, path = self.key.split(":", 1)
        return NamespacedKey(namespace, path)


class EnchantmentEntry(KeyedEntry):
    max_level: int = Field(default=1, ge=1, le=255)


class PotionTypeEntry(KeyedEntry):
    pass


class EffectTypeEntry(KeyedEntry):
    instant: bool = False


class EntityTypeEntry(KeyedEntry):
    spawnable: bool = True
