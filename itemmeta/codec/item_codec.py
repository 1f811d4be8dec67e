"""
Item codec: converts items to the intermediate representation and back.

The IR is a plain ordered dict. ``serialize_item`` writes the common fields
and hands the item's variant block to the one handler registered for its
kind; ``deserialize_item`` does the reverse. A failing handler never aborts
the call: its error is logged, recorded as a diagnostic, and the rest of the
item is kept.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, cast

from itemmeta.codec import encoding
from itemmeta.codec.handlers import HandlerRegistry, MetaHandler
from itemmeta.codec.persistent_data import PERSISTENT_DATA_KEY, deserialize_tags, serialize_tags
from itemmeta.codec.results import CodecResult, HandlerDiagnostic
from itemmeta.codec.type_utils import cast_as_list, cast_as_map
from itemmeta.config.models import CodecConfig
from itemmeta.exceptions import (
    ErrorContext,
    HandlerError,
    UnknownMaterialError,
    create_error_context,
    handle_exception,
)
from itemmeta.models.color import Color
from itemmeta.models.item import CustomModelData, Item
from itemmeta.models.meta import VariantMeta, new_variant
from itemmeta.models.text import TextComponent, TextComponentSerializer
from itemmeta.registry.models import MaterialEntry
from itemmeta.registry.registry_access import RegistryAccess
from itemmeta.structured_logging.enhanced_logging_config import (
    get_logger,
    log_exception_once,
    setup_enhanced_logging,
)
from itemmeta.versioning import ServerVersion

logger = get_logger(__name__)

MODEL_DATA_COMPONENT_SINCE = (1, 21, 5)

SERIALIZE = "serialize"
DESERIALIZE = "deserialize"


class ItemCodec:
    """
    Converts items to and from the IR, YAML text and MessagePack bytes.

    The codec holds only immutable collaborators and may be shared between
    threads.
    """

    def __init__(
        self,
        registries: RegistryAccess,
        text_serializer: TextComponentSerializer | None = None,
        version: ServerVersion | None = None,
    ):
        self._registries = registries
        self._text_serializer = text_serializer or TextComponentSerializer()
        self._version = version
        self._handlers = HandlerRegistry.default(self)

    @classmethod
    def from_config(cls, config: CodecConfig) -> ItemCodec:
        """
        Build a codec from settings: registry directory, host version and logging.

        Logging is set up once per process; a later call with different logging
        settings leaves the first configuration in place.
        """
        setup_enhanced_logging({"logging": config.logging.to_dict()})
        if config.registry_path is not None:
            registries = RegistryAccess.load_from_path(config.registry_path)
        else:
            registries = RegistryAccess.default()
        version = ServerVersion.try_parse(config.server_version)
        logger.info(
            "Item codec created",
            server_version=str(version) if version else None,
            registry_path=str(config.registry_path) if config.registry_path else "bundled",
        )
        if version is not None and version.is_legacy():
            logger.warning(
                "Host predates flattened material names; pre-1.13 material ids will not resolve",
                server_version=str(version),
            )
        return cls(registries, version=version)

    @classmethod
    def default(cls, server_version: str = "1.21.4") -> ItemCodec:
        return cls(RegistryAccess.default(), version=ServerVersion.try_parse(server_version))

    @property
    def registries(self) -> RegistryAccess:
        return self._registries

    @property
    def text_serializer(self) -> TextComponentSerializer:
        return self._text_serializer

    @property
    def version(self) -> ServerVersion | None:
        return self._version

    @property
    def handlers(self) -> HandlerRegistry:
        return self._handlers

    @property
    def supports_model_data_component(self) -> bool:
        return self._version is not None and self._version.is_at_least(*MODEL_DATA_COMPONENT_SINCE)

    # region Core operations

    def serialize_item(self, item: Item) -> dict[str, Any]:
        """Convert an item to its IR; handler failures are logged and skipped."""
        return self.serialize_item_with_diagnostics(item).value

    def serialize_item_with_diagnostics(self, item: Item) -> CodecResult[dict[str, Any]]:
        diagnostics: list[HandlerDiagnostic] = []
        item_data: dict[str, Any] = {}
        logger.debug("Serializing item", material=item.type.key)

        item_data["material"] = item.type.key
        item_data["amount"] = item.quantity

        if item.carries_meta:
            self._serialize_common(item, item_data)
            if item.variant is not None:
                self._run_handler(SERIALIZE, item.type.key, item.variant, item_data, diagnostics)

        return CodecResult(item_data, diagnostics)

    def deserialize_item(self, item_data: Any) -> Item | None:
        """Rebuild an item from its IR; returns None when the material cannot be resolved."""
        return self.deserialize_item_with_diagnostics(item_data).value

    def deserialize_item_with_diagnostics(self, item_data: Any) -> CodecResult[Item | None]:
        diagnostics: list[HandlerDiagnostic] = []
        data = cast_as_map(item_data, logger)
        if data is None:
            logger.error("Item data is not a map, cannot deserialize", actual=type(item_data).__name__)
            return CodecResult(None, diagnostics)

        try:
            material = self._resolve_material(data.get("material"))
        except UnknownMaterialError:
            return CodecResult(None, diagnostics)

        logger.debug("Deserializing item", material=material.key)
        item = Item(type=material, quantity=self._read_quantity(data, material))
        if not item.carries_meta:
            return CodecResult(item, diagnostics)

        self._deserialize_common(data, item)

        variant = new_variant(material.meta_kind)
        self._run_handler(DESERIALIZE, material.key, variant, data, diagnostics)
        item.variant = None if variant.is_empty() else variant
        return CodecResult(item, diagnostics)

    def serialize_item_list(self, items: Iterable[Item]) -> list[dict[str, Any]]:
        return [self.serialize_item(item) for item in items]

    def deserialize_item_list(self, items_data: Iterable[Any]) -> list[Item]:
        """
        Rebuild every item in order.

        Elements that fail (including non-map elements) are dropped, so the
        result may be shorter than the input.
        """
        items: list[Item] = []
        for index, item_data in enumerate(items_data):
            item = self.deserialize_item(item_data)
            if item is None:
                logger.warning("Dropping item that failed to deserialize", index=index)
                continue
            items.append(item)
        return items

    # endregion

    # region Text encoding

    def serialize_item_to_yaml(self, item: Item) -> str:
        return encoding.dump_yaml(self.serialize_item(item))

    def serialize_item_list_to_yaml(self, items: Iterable[Item]) -> str:
        return encoding.dump_yaml(self.serialize_item_list(items))

    def deserialize_item_from_yaml(self, text: str) -> Item | None:
        """
        Parse one item from YAML text.

        Raises:
            EncodingError: If the text is not valid YAML
            EncodingShapeError: If the document is not a map
        """
        value = encoding.load_yaml(text)
        if value is None:
            return None
        return self.deserialize_item(encoding.expect_map(value, encoding.YAML))

    def deserialize_item_list_from_yaml(self, text: str) -> list[Item]:
        value = encoding.load_yaml(text)
        if value is None:
            return []
        return self.deserialize_item_list(encoding.expect_list_of_maps(value, encoding.YAML))

    # endregion

    # region Binary encoding

    def serialize_item_to_bytes(self, item: Item) -> bytes:
        return encoding.pack_binary(self.serialize_item(item))

    def serialize_item_list_to_bytes(self, items: Iterable[Item]) -> bytes:
        return encoding.pack_binary(self.serialize_item_list(items))

    def deserialize_item_from_bytes(self, blob: bytes) -> Item | None:
        """
        Decode one item from a MessagePack payload.

        Raises:
            EncodingError: If the payload cannot be decoded
            EncodingShapeError: If the top-level value is not a map
        """
        return self.deserialize_item(encoding.expect_map(encoding.unpack_binary(blob), encoding.BINARY))

    def deserialize_item_list_from_bytes(self, blob: bytes) -> list[Item]:
        """
        Decode a list of items from a MessagePack payload.

        Raises:
            EncodingError: If the payload cannot be decoded
            EncodingShapeError: If the top-level value is not a list of maps
        """
        return self.deserialize_item_list(
            encoding.expect_list_of_maps(encoding.unpack_binary(blob), encoding.BINARY)
        )

    # endregion

    def _run_handler(
        self,
        operation: str,
        material: str,
        meta: VariantMeta,
        item_data: dict[str, Any],
        diagnostics: list[HandlerDiagnostic],
    ) -> None:
        handler: MetaHandler = self._handlers.handler_for(meta.kind)
        try:
            if operation == SERIALIZE:
                handler.serialize(meta, item_data)
            else:
                handler.deserialize(meta, item_data)
        except Exception as exc:  # pylint: disable=broad-exception-caught  # Reason: A failing handler must only cost its own variant's attributes
            context = create_error_context(material=material, variant=handler.variant_name, operation=operation)
            error = cast(HandlerError, handle_exception(exc, context))
            diagnostics.append(HandlerDiagnostic(handler.variant_name, operation, error))

    def _resolve_material(self, raw_material: Any) -> MaterialEntry:
        material = self._registries.materials.match(raw_material)
        if material is None:
            raise UnknownMaterialError(
                f"Cannot resolve material {raw_material!r}",
                ErrorContext(operation=DESERIALIZE),
                material=raw_material,
            )
        return material

    @staticmethod
    def _read_quantity(data: dict[str, Any], material: MaterialEntry) -> int:
        if "amount" not in data:
            return 1
        amount = data["amount"]
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            logger.warning("Invalid item amount, defaulting to 1", material=material.key, amount=repr(amount))
            return 1
        return amount

    # region Common fields

    def _serialize_common(self, item: Item, item_data: dict[str, Any]) -> None:
        if item.name is not None:
            item_data["name"] = self._text_serializer.serialize(item.name)
        if item.lore is not None:
            item_data["lore"] = [self._text_serializer.serialize(line) for line in item.lore]
        if item.durability is not None:
            item_data["durability"] = item.durability
        if item.tags:
            item_data[PERSISTENT_DATA_KEY] = serialize_tags(item.tags)
        self._serialize_model_data(item, item_data)

    def _deserialize_common(self, data: dict[str, Any], item: Item) -> None:
        if "name" in data:
            item.name = self._read_text(data["name"], "name")
        if "lore" in data:
            lines = cast_as_list(data["lore"], logger, item_type=str)
            if lines is not None:
                item.lore = [line for line in (self._read_text(raw, "lore") for raw in lines) if line is not None]
        durability = data.get("durability")
        if isinstance(durability, int) and not isinstance(durability, bool):
            if item.type.damageable:
                item.durability = durability
            else:
                logger.debug("Ignoring durability on a material that cannot take damage", material=item.type.key)
        if PERSISTENT_DATA_KEY in data:
            item.tags = deserialize_tags(data[PERSISTENT_DATA_KEY])
        self._deserialize_model_data(data, item)

    def _read_text(self, raw: Any, field: str) -> TextComponent | None:
        if not isinstance(raw, str):
            logger.warning("Display text is not a string, skipping", field=field, actual=type(raw).__name__)
            return None
        try:
            return self._text_serializer.deserialize_lenient(raw)
        except ValueError as exc:
            log_exception_once(logger, "warning", "Unreadable display text, skipping", exc=exc, field=field)
            return None

    def _serialize_model_data(self, item: Item, item_data: dict[str, Any]) -> None:
        if item.legacy_model_data is not None:
            item_data["customModelData"] = item.legacy_model_data
        if item.model_data is None:
            return
        if self.supports_model_data_component:
            item_data["customModelDataComponent"] = {
                "floats": list(item.model_data.floats),
                "flags": list(item.model_data.flags),
                "strings": list(item.model_data.strings),
                "colors": [color.serialize() for color in item.model_data.colors],
            }
        elif item.legacy_model_data is None:
            if item.model_data.floats:
                item_data["customModelData"] = int(item.model_data.floats[0])
            else:
                logger.debug("Model data component has no float to write on this host", material=item.type.key)

    def _deserialize_model_data(self, data: dict[str, Any], item: Item) -> None:
        legacy = data.get("customModelData")
        if isinstance(legacy, bool) or not isinstance(legacy, int):
            legacy = None
        component = self._read_model_data_component(data.get("customModelDataComponent"))

        if legacy is not None:
            item.legacy_model_data = legacy
        if self.supports_model_data_component:
            item.model_data = component
        elif legacy is None and component is not None and component.floats:
            item.legacy_model_data = int(component.floats[0])

    @staticmethod
    def _read_model_data_component(raw: Any) -> CustomModelData | None:
        component = cast_as_map(raw)
        if component is None:
            return None
        floats = cast_as_list(component.get("floats", []), logger, item_type=(int, float)) or []
        colors: list[Color] = []
        for value in cast_as_list(component.get("colors", []), logger, item_type=str) or []:
            try:
                colors.append(Color.deserialize(value))
            except ValueError as exc:
                log_exception_once(logger, "debug", "Skipping malformed model data colour", exc=exc, value=value)
        return CustomModelData(
            floats=[float(value) for value in floats if not isinstance(value, bool)],
            flags=cast_as_list(component.get("flags", []), logger, item_type=bool) or [],
            strings=cast_as_list(component.get("strings", []), logger, item_type=str) or [],
            colors=colors,
        )

    # endregion
