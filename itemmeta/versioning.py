"""Host engine version parsing and comparison."""

from __future__ import annotations

import re
from dataclasses import dataclass

_VERSION_PATTERN = re.compile(r"^\s*(\d+)\.(\d+)(?:\.(\d+))?")


@dataclass(frozen=True, slots=True, order=True)
class ServerVersion:
    """A ``major.minor.patch`` engine version; a missing patch counts as 0."""

    major: int
    minor: int
    patch: int = 0

    @classmethod
    def parse(cls, raw: str) -> ServerVersion:
        """
        Parse a version string such as ``"1.21.4"`` or ``"1.20.1-R0.1-SNAPSHOT"``.

        Raises:
            ValueError: If the string does not start with ``major.minor``
        """
        match = _VERSION_PATTERN.match(raw or "")
        if match is None:
            raise ValueError(f"Unrecognised server version: {raw!r}")
        major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch or 0))

    @classmethod
    def try_parse(cls, raw: str | None) -> ServerVersion | None:
        if raw is None:
            return None
        try:
            return cls.parse(raw)
        except ValueError:
            return None

    def is_at_least(self, major: int, minor: int, patch: int = 0) -> bool:
        return (self.major, self.minor, self.patch) >= (major, minor, patch)

    def is_legacy(self) -> bool:
        """Versions before 1.13 (the flattening) are legacy."""
        return not self.is_at_least(1, 13)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
