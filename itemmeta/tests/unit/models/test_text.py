"""
Unit tests for text components and legacy colour code translation.
"""

import pytest

from itemmeta.models.text import TextComponent, TextComponentSerializer, translate_legacy_colors

serializer = TextComponentSerializer()


def test_serialize_is_compact_and_omits_unset_style():
    """Test only set fields are written."""
    component = TextComponent.of("Hello", color="red", bold=True)

    assert serializer.serialize(component) == '{"text":"Hello","color":"red","bold":true}'


def test_serialize_always_includes_text():
    """Test an empty component still has a text field."""
    assert serializer.serialize(TextComponent(italic=False)) == '{"text":"","italic":false}'


def test_serialize_nested_children():
    """Test extra children are written recursively."""
    component = TextComponent(text="", extra=[TextComponent.of("a"), TextComponent.of("b", italic=True)])

    assert serializer.deserialize(serializer.serialize(component)) == component


def test_deserialize_accepts_string_and_array_payloads():
    """Test the shorthand JSON forms."""
    assert serializer.deserialize('"plain"') == TextComponent(text="plain")
    assert serializer.deserialize('["a", {"text": "b", "bold": true}]') == TextComponent(
        text="a", extra=[TextComponent(text="b", bold=True)]
    )


@pytest.mark.parametrize("raw", ["{not json", "42", '{"text": 5, "bold": "very"}'])
def test_deserialize_rejects_invalid_components(raw):
    """Test malformed components raise ValueError."""
    with pytest.raises(ValueError):
        serializer.deserialize(raw)


def test_deserialize_lenient_routes_by_shape():
    """Test JSON-looking text is parsed as JSON and anything else as legacy codes."""
    assert serializer.deserialize_lenient('{"text":"x"}') == TextComponent(text="x")
    assert serializer.deserialize_lenient("&cWarning") == TextComponent(text="Warning", color="red", italic=False)


def test_legacy_codes_build_segments():
    """Test colour codes reset decorations and &r resets everything."""
    component = translate_legacy_colors("&a&lGreen bold&r plain &#FF8800hex")

    assert component.italic is False
    assert component.extra == [
        TextComponent(text="Green bold", color="green", bold=True),
        TextComponent(text=" plain "),
        TextComponent(text="hex", color="#ff8800"),
    ]


def test_legacy_section_sign_is_accepted():
    """Test the section sign works like the ampersand."""
    assert translate_legacy_colors("§9Blue") == TextComponent(text="Blue", color="blue", italic=False)


def test_legacy_unknown_code_is_kept_literally():
    """Test an ampersand not followed by a code is plain text."""
    assert translate_legacy_colors("Salt & pepper") == TextComponent(text="Salt & pepper", italic=False)


def test_legacy_explicit_italic_is_kept():
    """Test &o still produces italic text."""
    assert translate_legacy_colors("&oSlanted").italic is True
