from __future__ import annotations

import json
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from itemmeta.exceptions import RegistryError
from itemmeta.models.keys import NamespacedKey
from itemmeta.registry.models import (
    EffectTypeEntry,
    EnchantmentEntry,
    EntityTypeEntry,
    KeyedEntry,
    MaterialEntry,
    PotionTypeEntry,
)
from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

EntryT = TypeVar("EntryT", bound=KeyedEntry)

MATERIALS_FILE = "materials.json"
KEYED_REGISTRY_FILES: dict[str, type[KeyedEntry]] = {
    "enchantments.json": EnchantmentEntry,
    "potion_types.json": PotionTypeEntry,
    "effect_types.json": EffectTypeEntry,
    "entity_types.json": EntityTypeEntry,
}


class KeyedRegistry(Generic[EntryT]):
    """In-memory registry of entries addressed by namespaced key."""

    def __init__(self, name: str, entries: Iterable[EntryT]):
        self.name = name
        self._entries: dict[NamespacedKey, EntryT] = {entry.namespaced_key: entry for entry in entries}

    def get(self, key: NamespacedKey | None) -> EntryT | None:
        if key is None:
            return None
        return self._entries.get(key)

    def require(self, key: NamespacedKey) -> EntryT:
        try:
            return self._entries[key]
        except KeyError as exc:
            raise RegistryError(f"{self.name} entry not found: {key}", registry=self.name, key=str(key)) from exc

    def all(self) -> Iterable[EntryT]:
        return self._entries.values()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


class MaterialRegistry:
    """Materials addressed by their upper-case enum-style name."""

    def __init__(self, entries: Iterable[MaterialEntry]):
        self._entries: dict[str, MaterialEntry] = {entry.key: entry for entry in entries}

    def match(self, name: Any) -> MaterialEntry | None:
        """
        Resolve a stored material name.

        Accepts the enum form (``DIAMOND_SWORD``) in any case and the
        namespaced form (``minecraft:diamond_sword``). Returns None when the
        name is not a string or is unknown.
        """
        if not isinstance(name, str):
            return None
        candidate = name.strip()
        if ":" in candidate:
            parsed = NamespacedKey.from_string(candidate.lower())
            if parsed is None:
                return None
            candidate = parsed.key
        return self._entries.get(candidate.upper())

    def get(self, key: str) -> MaterialEntry:
        try:
            return self._entries[key]
        except KeyError as exc:
            raise RegistryError(f"Material not found: {key}", registry="material", key=key) from exc

    def all(self) -> Iterable[MaterialEntry]:
        return self._entries.values()

    def __len__(self) -> int:
        return len(self._entries)


class RegistryAccess:
    """
    Entry point for namespaced id resolution.

    Registries are loaded from a directory of JSON files, each holding a list
    of entry objects. Entries that fail validation are logged and collected
    rather than aborting the load.
    """

    def __init__(
        self,
        materials: MaterialRegistry,
        enchantments: KeyedRegistry[EnchantmentEntry],
        potion_types: KeyedRegistry[PotionTypeEntry],
        effect_types: KeyedRegistry[EffectTypeEntry],
        entity_types: KeyedRegistry[EntityTypeEntry],
        invalid_entries: list[dict] | None = None,
    ):
        self.materials = materials
        self.enchantments = enchantments
        self.potion_types = potion_types
        self.effect_types = effect_types
        self.entity_types = entity_types
        self._invalid_entries = invalid_entries or []

    @classmethod
    def default(cls) -> RegistryAccess:
        """Load the registry data bundled with the package."""
        data_dir = resources.files("itemmeta.registry") / "data"
        with resources.as_file(data_dir) as directory:
            return cls.load_from_path(directory)

    @classmethod
    def load_from_path(cls, directory: Path | str) -> RegistryAccess:
        directory_path = Path(directory)
        if not directory_path.is_dir():
            raise RegistryError(f"Registry directory not found: {directory_path}", registry="all")

        invalid_entries: list[dict] = []
        materials = MaterialRegistry(
            _load_entries(directory_path / MATERIALS_FILE, MaterialEntry, invalid_entries)  # type: ignore[arg-type]
        )
        keyed: dict[str, KeyedRegistry[Any]] = {}
        for filename, entry_type in KEYED_REGISTRY_FILES.items():
            name = filename.removesuffix(".json")
            keyed[name] = KeyedRegistry(name, _load_entries(directory_path / filename, entry_type, invalid_entries))

        logger.debug(
            "Registries loaded",
            directory=str(directory_path),
            materials=len(materials),
            **{name: len(registry) for name, registry in keyed.items()},
            invalid=len(invalid_entries),
        )
        return cls(
            materials,
            keyed["enchantments"],
            keyed["potion_types"],
            keyed["effect_types"],
            keyed["entity_types"],
            invalid_entries,
        )

    def invalid_entries(self) -> list[dict]:
        return list(self._invalid_entries)


def _load_entries(json_file: Path, entry_type: type[BaseModel], invalid_entries: list[dict]) -> list[Any]:
    if not json_file.exists():
        logger.warning("Registry file missing, registry will be empty", file_path=str(json_file))
        return []

    try:
        payload = json.loads(json_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning("invalid registry payload", file_path=str(json_file), error=str(exc))
        invalid_entries.append({"file_path": str(json_file), "errors": str(exc)})
        return []

    if not isinstance(payload, list):
        logger.warning("registry payload is not a list", file_path=str(json_file), actual=type(payload).__name__)
        invalid_entries.append({"file_path": str(json_file), "errors": "expected a list of entries"})
        return []

    entries: list[Any] = []
    for raw_entry in payload:
        try:
            entries.append(entry_type.model_validate(raw_entry))
        except ValidationError as exc:
            entry_key = raw_entry.get("key") if isinstance(raw_entry, dict) else None
            logger.warning(
                "invalid registry entry",
                key=entry_key,
                file_path=str(json_file),
                errors=exc.errors(),
            )
            invalid_entries.append({"key": entry_key, "file_path": str(json_file), "errors": exc.errors()})
    return entries
