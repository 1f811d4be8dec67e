"""Variant handler package.

One handler per variant kind, held by HandlerRegistry in a fixed order so
that diagnostics and debug output always list variants the same way.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from itemmeta.models.meta import MetaKind

from .base import MetaHandler
from .book import BookHandler
from .crossbow import CrossbowHandler
from .enchantments import EnchantmentHandler, EnchantmentStorageHandler
from .firework import FireworkEffectHandler, FireworkHandler
from .leather_armor import LeatherArmorHandler
from .potion import PotionHandler
from .skull import SkullHandler
from .spawn_egg import SpawnEggHandler

if TYPE_CHECKING:
    from itemmeta.codec.item_codec import ItemCodec

HANDLER_ORDER: tuple[type[MetaHandler], ...] = (
    EnchantmentHandler,
    EnchantmentStorageHandler,
    BookHandler,
    CrossbowHandler,
    FireworkEffectHandler,
    FireworkHandler,
    LeatherArmorHandler,
    PotionHandler,
    SkullHandler,
    SpawnEggHandler,
)


class HandlerRegistry:
    """Ordered collection of variant handlers addressed by variant kind."""

    def __init__(self, handlers: tuple[MetaHandler, ...]):
        self._handlers = handlers
        self._by_kind: dict[MetaKind, MetaHandler] = {}
        for handler in handlers:
            if handler.kind in self._by_kind:
                raise ValueError(f"Duplicate handler registered for {handler.kind}")
            self._by_kind[handler.kind] = handler

    @classmethod
    def default(cls, codec: ItemCodec) -> HandlerRegistry:
        return cls(tuple(handler_type(codec) for handler_type in HANDLER_ORDER))

    def handler_for(self, kind: MetaKind) -> MetaHandler:
        """
        Return the handler for a variant kind.

        Raises:
            KeyError: If no handler is registered for the kind
        """
        return self._by_kind[kind]

    def __iter__(self) -> Iterator[MetaHandler]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


__all__ = [
    "BookHandler",
    "CrossbowHandler",
    "EnchantmentHandler",
    "EnchantmentStorageHandler",
    "FireworkEffectHandler",
    "FireworkHandler",
    "HANDLER_ORDER",
    "HandlerRegistry",
    "LeatherArmorHandler",
    "MetaHandler",
    "PotionHandler",
    "SkullHandler",
    "SpawnEggHandler",
]
