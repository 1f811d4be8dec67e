"""
Unit tests for the Color value object.
"""

import pytest
from pydantic import ValidationError

from itemmeta.models.color import Color


def test_color_defaults_to_opaque():
    """Test alpha defaults to 255."""
    assert Color.from_rgb(1, 2, 3).alpha == 255


def test_color_text_form():
    """Test the a;r;g;b form in both directions."""
    color = Color.from_argb(128, 10, 20, 30)

    assert color.serialize() == "128;10;20;30"
    assert Color.deserialize("128;10;20;30") == color
    assert Color.deserialize(" 255 ; 1;2 ;3") == Color.from_rgb(1, 2, 3)


@pytest.mark.parametrize("raw", ["1;2;3", "a;b;c;d", "255;256;0;0", "", 42])
def test_color_rejects_malformed_text(raw):
    """Test malformed colour text raises ValueError."""
    with pytest.raises(ValueError):
        Color.deserialize(raw)


def test_color_channels_are_range_checked():
    """Test channels outside 0..255 are rejected on construction."""
    with pytest.raises(ValidationError):
        Color(red=-1, green=0, blue=0)


def test_color_is_hashable_and_frozen():
    """Test colours can be used in sets and cannot be mutated."""
    color = Color.from_rgb(5, 6, 7)

    assert {color, Color.from_rgb(5, 6, 7)} == {color}
    with pytest.raises(ValidationError):
        color.red = 9
