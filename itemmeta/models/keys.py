"""Namespaced identifiers (``namespace:path``) used by every registry lookup."""

from __future__ import annotations

import re
from dataclasses import dataclass

MINECRAFT_NAMESPACE = "minecraft"

_NAMESPACE_PATTERN = re.compile(r"^[a-z0-9._-]+$")
_PATH_PATTERN = re.compile(r"^[a-z0-9/._-]+$")


@dataclass(frozen=True, slots=True)
class NamespacedKey:
    """An immutable ``namespace:path`` identifier."""

    namespace: str
    key: str

    def __post_init__(self) -> None:
        if not _NAMESPACE_PATTERN.match(self.namespace):
            raise ValueError(f"Invalid namespace: {self.namespace!r}")
        if not _PATH_PATTERN.match(self.key):
            raise ValueError(f"Invalid key: {self.key!r}")

    @classmethod
    def minecraft(cls, key: str) -> NamespacedKey:
        return cls(MINECRAFT_NAMESPACE, key)

    @classmethod
    def from_string(cls, raw: str, default_namespace: str = MINECRAFT_NAMESPACE) -> NamespacedKey | None:
        """
        Parse ``"namespace:path"`` or a bare ``"path"``.

        A bare path (or an empty namespace, ``":path"``) gets the default
        namespace. Returns None for anything that is not a valid key; this
        never raises.
        """
        if not isinstance(raw, str) or not raw:
            return None
        parts = raw.split(":")
        if len(parts) > 2:
            return None
        if len(parts) == 1:
            namespace, path = default_namespace, parts[0]
        else:
            namespace, path = parts[0] or default_namespace, parts[1]
        try:
            return cls(namespace, path)
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"{self.namespace}:{self.key}"
