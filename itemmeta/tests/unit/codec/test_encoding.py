"""
Unit tests for the YAML and MessagePack encoding adapters and their shape checks.
"""

import msgpack
import pytest

from itemmeta.codec import ItemCodec
from itemmeta.codec.encoding import (
    BINARY,
    dump_yaml,
    expect_list_of_maps,
    expect_map,
    load_yaml,
    pack_binary,
    unpack_binary,
)
from itemmeta.exceptions import EncodingError, EncodingShapeError


def test_yaml_is_block_style_with_insertion_order():
    """Test YAML output keeps key order and uses block style."""
    text = dump_yaml({"material": "STONE", "amount": 2, "lore": ["a", "b"]})

    assert text == "material: STONE\namount: 2\nlore:\n- a\n- b\n"


def test_yaml_round_trips_bytes_as_binary():
    """Test raw bytes survive the text encoding."""
    data = {"projectiles": b"\x93\x01\x02\x03", "name": "Zoë"}

    text = dump_yaml(data)

    assert "!!binary" in text
    assert "Zoë" in text
    assert load_yaml(text) == data


def test_binary_round_trips_ir_values():
    """Test MessagePack keeps strings, ints, floats, bools, bytes and nesting."""
    data = {"a": 1, "b": 2.5, "c": True, "d": b"\x00", "e": ["x", {"f": None}]}

    assert unpack_binary(pack_binary(data)) == data


@pytest.mark.parametrize("blob", [b"", b"\xc1", b"\x92\x01"])
def test_undecodable_binary_raises_encoding_error(blob):
    """Test empty, invalid and truncated payloads are rejected."""
    with pytest.raises(EncodingError):
        unpack_binary(blob)


def test_non_bytes_payload_raises_encoding_error():
    """Test a str passed as a binary payload is rejected."""
    with pytest.raises(EncodingError):
        unpack_binary("not bytes")


def test_invalid_yaml_raises_encoding_error():
    """Test malformed YAML text is rejected."""
    with pytest.raises(EncodingError):
        load_yaml("material: [unclosed")


def test_expect_map_rejects_lists_and_scalars():
    """Test top-level shape checks for single items."""
    assert expect_map({"material": "STONE"}, BINARY) == {"material": "STONE"}
    with pytest.raises(EncodingShapeError) as exc_info:
        expect_map([1, 2], BINARY)
    assert exc_info.value.expected == "map"
    assert exc_info.value.actual == "list"
    assert exc_info.value.encoding == BINARY


def test_expect_list_of_maps_rejects_mixed_lists():
    """Test every element of a batch payload must be a map."""
    assert expect_list_of_maps([{"a": 1}], BINARY) == [{"a": 1}]
    with pytest.raises(EncodingShapeError):
        expect_list_of_maps({"a": 1}, BINARY)
    with pytest.raises(EncodingShapeError):
        expect_list_of_maps([{"a": 1}, 5], BINARY)


def test_single_binary_decode_rejects_list_payload(codec: ItemCodec):
    """Test single-item binary decode raises on a list payload."""
    with pytest.raises(EncodingShapeError):
        codec.deserialize_item_from_bytes(msgpack.packb([{"material": "STONE"}], use_bin_type=True))


def test_list_binary_decode_rejects_map_payload(codec: ItemCodec):
    """Test batch binary decode raises on a map payload."""
    with pytest.raises(EncodingShapeError):
        codec.deserialize_item_list_from_bytes(msgpack.packb({"material": "STONE"}, use_bin_type=True))


def test_list_binary_decode_rejects_non_map_elements(codec: ItemCodec):
    """Test batch binary decode raises when an element is not a map."""
    payload = msgpack.packb([{"material": "STONE"}, "STONE"], use_bin_type=True)

    with pytest.raises(EncodingShapeError):
        codec.deserialize_item_list_from_bytes(payload)


def test_list_binary_decode_drops_unresolvable_items(codec: ItemCodec):
    """Test a well-shaped element with an unknown material is dropped, not fatal."""
    payload = msgpack.packb([{"material": "NOPE"}, {"material": "STONE", "amount": 4}], use_bin_type=True)

    items = codec.deserialize_item_list_from_bytes(payload)

    assert [(item.type.key, item.quantity) for item in items] == [("STONE", 4)]


def test_empty_yaml_document(codec: ItemCodec):
    """Test an empty document decodes to nothing rather than failing."""
    assert codec.deserialize_item_from_yaml("") is None
    assert codec.deserialize_item_list_from_yaml("") == []


def test_yaml_shape_errors(codec: ItemCodec):
    """Test YAML decode applies the same shape policy as binary decode."""
    with pytest.raises(EncodingShapeError):
        codec.deserialize_item_from_yaml("- material: STONE\n")
    with pytest.raises(EncodingShapeError):
        codec.deserialize_item_list_from_yaml("material: STONE\n")
    with pytest.raises(EncodingShapeError):
        codec.deserialize_item_list_from_yaml("just a string\n")
