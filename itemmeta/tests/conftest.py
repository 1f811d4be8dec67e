"""
Shared fixtures for the itemmeta test suite.

Registries are loaded once from the bundled data; every test gets a fresh
codec and a cleared potion-name probe.
"""

import logging
from collections.abc import Callable, Generator

import pytest
import structlog

from itemmeta.codec import ItemCodec, reset_potion_name_accessor
from itemmeta.models.keys import NamespacedKey
from itemmeta.registry import MaterialEntry, RegistryAccess
from itemmeta.structured_logging import enhanced_logging_config
from itemmeta.versioning import ServerVersion


@pytest.fixture(scope="session")
def registries() -> RegistryAccess:
    return RegistryAccess.default()


@pytest.fixture()
def codec(registries: RegistryAccess) -> ItemCodec:
    return ItemCodec(registries, version=ServerVersion(1, 21, 4))


@pytest.fixture()
def codec_for(registries: RegistryAccess) -> Callable[[str], ItemCodec]:
    """Build a codec for a specific host version."""

    def _build(version: str) -> ItemCodec:
        return ItemCodec(registries, version=ServerVersion.try_parse(version))

    return _build


@pytest.fixture()
def material(registries: RegistryAccess) -> Callable[[str], MaterialEntry]:
    return registries.materials.get


@pytest.fixture()
def enchantment(registries: RegistryAccess):
    return lambda name: registries.enchantments.require(NamespacedKey.minecraft(name))


@pytest.fixture(autouse=True)
def reset_probe() -> Generator[None, None, None]:
    reset_potion_name_accessor()
    yield
    reset_potion_name_accessor()


@pytest.fixture()
def restore_logging() -> Generator[None, None, None]:
    """Undo any logging setup a test performed."""
    yield
    package_logger = logging.getLogger("itemmeta")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    enhanced_logging_config._logging_state.initialized = False  # pylint: disable=protected-access  # Reason: Test isolation
    enhanced_logging_config._logging_state.signature = None  # pylint: disable=protected-access  # Reason: Test isolation
    structlog.reset_defaults()
