"""Codec package.

ItemCodec converts items to the intermediate representation (an ordered
dict) and to its YAML and MessagePack encodings.
"""

from .capabilities import PotionNameConvention, get_potion_name_accessor, reset_potion_name_accessor
from .item_codec import ItemCodec
from .results import CodecResult, HandlerDiagnostic
from .type_utils import cast_as_list, cast_as_list_of_maps, cast_as_map

__all__ = [
    "CodecResult",
    "HandlerDiagnostic",
    "ItemCodec",
    "PotionNameConvention",
    "cast_as_list",
    "cast_as_list_of_maps",
    "cast_as_map",
    "get_potion_name_accessor",
    "reset_potion_name_accessor",
]
