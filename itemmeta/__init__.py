"""itemmeta: item metadata serialization.

Converts items (a material, a quantity, display text, persistent tags and
one optional variant block) to a portable intermediate representation and
back, with YAML and MessagePack encodings of that representation.
"""

from .codec import CodecResult, HandlerDiagnostic, ItemCodec
from .exceptions import (
    EncodingError,
    EncodingShapeError,
    HandlerError,
    InvalidItemError,
    ItemMetaError,
    RegistryError,
    UnknownMaterialError,
)
from .models import Item, TaggedValue, TagType
from .registry import RegistryAccess
from .versioning import ServerVersion

__version__ = "0.1.0"

__all__ = [
    "CodecResult",
    "EncodingError",
    "EncodingShapeError",
    "HandlerDiagnostic",
    "HandlerError",
    "InvalidItemError",
    "Item",
    "ItemCodec",
    "ItemMetaError",
    "RegistryAccess",
    "RegistryError",
    "ServerVersion",
    "TagType",
    "TaggedValue",
    "UnknownMaterialError",
]
