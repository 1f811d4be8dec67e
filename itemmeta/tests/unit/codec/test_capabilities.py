"""
Unit tests for the potion-name capability probe.
"""

from structlog.testing import capture_logs

from itemmeta.codec.capabilities import (
    PotionNameConvention,
    get_potion_name_accessor,
    reset_potion_name_accessor,
    select_potion_name_convention,
)
from itemmeta.models.meta import PotionMeta
from itemmeta.versioning import ServerVersion


def test_select_convention_by_version():
    """Test version gates for each convention."""
    assert select_potion_name_convention(ServerVersion(1, 21, 4)) is PotionNameConvention.MODERN
    assert select_potion_name_convention(ServerVersion(1, 22)) is PotionNameConvention.MODERN
    assert select_potion_name_convention(ServerVersion(1, 21, 3)) is PotionNameConvention.LEGACY
    assert select_potion_name_convention(ServerVersion(1, 9)) is PotionNameConvention.LEGACY
    assert select_potion_name_convention(ServerVersion(1, 8, 8)) is PotionNameConvention.DISABLED
    assert select_potion_name_convention(None) is PotionNameConvention.DISABLED


def test_accessor_is_memoized_for_the_process():
    """Test the first probe wins until reset."""
    first = get_potion_name_accessor(ServerVersion(1, 21, 4))
    second = get_potion_name_accessor(ServerVersion(1, 12))

    assert first is second
    assert second.convention is PotionNameConvention.MODERN

    reset_potion_name_accessor()
    assert get_potion_name_accessor(ServerVersion(1, 12)).convention is PotionNameConvention.LEGACY


def test_disabled_result_is_cached_and_logged_once():
    """Test an unsupported host disables the feature without retrying."""
    with capture_logs() as cap_logs:
        disabled = get_potion_name_accessor(None)
        again = get_potion_name_accessor(ServerVersion(1, 21, 4))

    assert not disabled.enabled
    assert again is disabled
    warnings = [entry for entry in cap_logs if entry["log_level"] == "warning"]
    assert len(warnings) == 1


def test_accessors_read_and_write_the_same_name():
    """Test both conventions address the potion's own name."""
    meta = PotionMeta()
    modern = get_potion_name_accessor(ServerVersion(1, 21, 4))
    modern.set(meta, "Tonic")
    reset_potion_name_accessor()
    legacy = get_potion_name_accessor(ServerVersion(1, 20))

    assert legacy.get(meta) == "Tonic"
    legacy.set(meta, "Elixir")
    assert meta.custom_potion_name == "Elixir"


def test_disabled_accessor_is_a_no_op():
    """Test the disabled accessor never touches the meta."""
    meta = PotionMeta(custom_potion_name="Kept")
    accessor = get_potion_name_accessor(ServerVersion(1, 7, 10))

    accessor.set(meta, "Changed")

    assert accessor.get(meta) is None
    assert meta.custom_potion_name == "Kept"
