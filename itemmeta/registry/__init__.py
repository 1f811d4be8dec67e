"""Registry package.

Resolves namespaced ids to materials, enchantments, potion types, effect
types and entity types, loaded from validated JSON data.
"""

from .models import EffectTypeEntry, EnchantmentEntry, EntityTypeEntry, MaterialEntry, PotionTypeEntry
from .registry_access import KeyedRegistry, MaterialRegistry, RegistryAccess

__all__ = [
    "EffectTypeEntry",
    "EnchantmentEntry",
    "EntityTypeEntry",
    "KeyedRegistry",
    "MaterialEntry",
    "MaterialRegistry",
    "PotionTypeEntry",
    "RegistryAccess",
]
