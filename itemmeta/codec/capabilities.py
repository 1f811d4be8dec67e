"""
Host capability probing.

Hosts from 1.21.4 on expose a potion's own display name through the
``custom_potion_name`` accessor; older hosts expose it as ``custom_name``.
The convention is selected once per process from the configured engine
version and reused for every potion afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from itemmeta.structured_logging.enhanced_logging_config import get_logger
from itemmeta.versioning import ServerVersion

logger = get_logger(__name__)

MODERN_POTION_NAME_SINCE = (1, 21, 4)
LEGACY_POTION_NAME_SINCE = (1, 9, 0)


class PotionNameConvention(StrEnum):
    MODERN = "modern"
    LEGACY = "legacy"
    DISABLED = "disabled"


@dataclass(frozen=True, slots=True)
class PotionNameAccessor:
    """Reads and writes the potion name through one accessor convention."""

    convention: PotionNameConvention
    attribute: str | None

    @property
    def enabled(self) -> bool:
        return self.attribute is not None

    def get(self, meta: Any) -> str | None:
        if self.attribute is None:
            return None
        return getattr(meta, self.attribute)

    def set(self, meta: Any, value: str | None) -> None:
        if self.attribute is None:
            return
        setattr(meta, self.attribute, value)


_ACCESSORS: dict[PotionNameConvention, PotionNameAccessor] = {
    PotionNameConvention.MODERN: PotionNameAccessor(PotionNameConvention.MODERN, "custom_potion_name"),
    PotionNameConvention.LEGACY: PotionNameAccessor(PotionNameConvention.LEGACY, "custom_name"),
    PotionNameConvention.DISABLED: PotionNameAccessor(PotionNameConvention.DISABLED, None),
}


class _ProbeState:  # pylint: disable=too-few-public-methods  # Reason: State container class to avoid global statements
    accessor: PotionNameAccessor | None = None


_probe_state = _ProbeState()


def select_potion_name_convention(version: ServerVersion | None) -> PotionNameConvention:
    if version is None:
        return PotionNameConvention.DISABLED
    if version.is_at_least(*MODERN_POTION_NAME_SINCE):
        return PotionNameConvention.MODERN
    if version.is_at_least(*LEGACY_POTION_NAME_SINCE):
        return PotionNameConvention.LEGACY
    return PotionNameConvention.DISABLED


def get_potion_name_accessor(version: ServerVersion | None) -> PotionNameAccessor:
    """
    Return the process-wide potion name accessor, probing on first use.

    A disabled result is cached like any other: the probe is never retried.
    Concurrent first calls may both probe; they compute the same answer.
    """
    cached = _probe_state.accessor
    if cached is not None:
        return cached

    convention = select_potion_name_convention(version)
    accessor = _ACCESSORS[convention]
    if not accessor.enabled:
        logger.warning(
            "Potion custom names unsupported on this host; feature disabled",
            server_version=str(version) if version else None,
        )
    else:
        logger.debug("Potion name accessor selected", convention=str(convention), server_version=str(version))
    _probe_state.accessor = accessor
    return accessor


def reset_potion_name_accessor() -> None:
    """Forget the probed accessor (tests only)."""
    _probe_state.accessor = None
