"""
Unit tests for ServerVersion.
"""

import pytest

from itemmeta.versioning import ServerVersion


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.21.4", ServerVersion(1, 21, 4)),
        ("1.20", ServerVersion(1, 20, 0)),
        ("1.20.1-R0.1-SNAPSHOT", ServerVersion(1, 20, 1)),
        (" 1.8.8", ServerVersion(1, 8, 8)),
    ],
)
def test_parse(raw, expected):
    """Test supported version string forms."""
    assert ServerVersion.parse(raw) == expected


@pytest.mark.parametrize("raw", ["", "one.two", "1", "v1.20"])
def test_parse_rejects_garbage(raw):
    """Test unparseable versions raise ValueError."""
    with pytest.raises(ValueError):
        ServerVersion.parse(raw)


def test_try_parse_returns_none():
    """Test the non-raising variant."""
    assert ServerVersion.try_parse("nonsense") is None
    assert ServerVersion.try_parse(None) is None
    assert ServerVersion.try_parse("1.21") == ServerVersion(1, 21)


def test_is_at_least_treats_missing_patch_as_zero():
    """Test comparisons against major.minor[.patch]."""
    version = ServerVersion.parse("1.21")

    assert version.is_at_least(1, 21)
    assert version.is_at_least(1, 20, 6)
    assert not version.is_at_least(1, 21, 1)


def test_legacy_cutoff():
    """Test versions before 1.13 are legacy."""
    assert ServerVersion(1, 12, 2).is_legacy()
    assert not ServerVersion(1, 13).is_legacy()


def test_ordering_and_str():
    assert ServerVersion(1, 9) < ServerVersion(1, 21, 4)
    assert str(ServerVersion(1, 21)) == "1.21.0"
