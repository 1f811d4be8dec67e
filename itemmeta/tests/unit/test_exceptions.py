"""
Unit tests for exception classes and error handling.
"""

from datetime import datetime

from structlog.testing import capture_logs

from itemmeta.exceptions import (
    EncodingError,
    EncodingShapeError,
    ErrorContext,
    HandlerError,
    InvalidItemError,
    ItemMetaError,
    RegistryError,
    UnknownMaterialError,
    create_error_context,
    handle_exception,
)


def test_error_context_initialization():
    """Test ErrorContext initialization with default values."""
    context = ErrorContext()
    assert context.material is None
    assert context.variant is None
    assert context.operation is None
    assert isinstance(context.timestamp, datetime)
    assert context.metadata == {}


def test_error_context_to_dict():
    """Test ErrorContext.to_dict() conversion."""
    context = create_error_context(material="POTION", variant="potion", operation="serialize")
    result = context.to_dict()

    assert result["material"] == "POTION"
    assert result["variant"] == "potion"
    assert result["operation"] == "serialize"
    assert isinstance(result["timestamp"], str)


def test_errors_log_themselves_once():
    """Test construction logs a structured event and marks the error."""
    with capture_logs() as cap_logs:
        error = ItemMetaError("something broke", ErrorContext(material="STONE"))

    assert error.already_logged
    assert len(cap_logs) == 1
    assert cap_logs[0]["error_type"] == "ItemMetaError"
    assert cap_logs[0]["context"]["material"] == "STONE"


def test_registry_error_logs_as_warning():
    """Test registry lookups failing are warnings rather than errors."""
    with capture_logs() as cap_logs:
        RegistryError("not found", registry="enchantments", key="minecraft:x")

    assert cap_logs[0]["log_level"] == "warning"
    assert cap_logs[0]["details"] == {"registry": "enchantments", "key": "minecraft:x"}


def test_handler_error_records_cause():
    """Test HandlerError keeps the variant and original exception."""
    cause = KeyError("type")
    error = HandlerError("firework failed", variant="firework", cause=cause)

    assert error.variant == "firework"
    assert error.cause is cause
    assert error.details["cause_type"] == "KeyError"
    assert error.to_dict()["details"]["variant"] == "firework"


def test_subclass_details():
    """Test subclasses add their fields to details."""
    assert InvalidItemError("bad", field="quantity").details == {"field": "quantity"}
    assert UnknownMaterialError("bad", material=3).details == {"material": "3"}
    shape = EncodingShapeError("bad", encoding="binary", expected="map", actual="list")
    assert isinstance(shape, EncodingError)
    assert shape.details == {"encoding": "binary", "expected": "map", "actual": "list"}


def test_handle_exception_maps_onto_hierarchy():
    """Test generic exceptions are converted by context and type."""
    existing = InvalidItemError("already ours")
    assert handle_exception(existing) is existing

    handler_error = handle_exception(RuntimeError("boom"), ErrorContext(variant="skull"))
    assert isinstance(handler_error, HandlerError)
    assert handler_error.variant == "skull"

    assert isinstance(handle_exception(ValueError("bad")), InvalidItemError)

    generic = handle_exception(RuntimeError("boom"))
    assert type(generic) is ItemMetaError
    assert generic.details["original_type"] == "RuntimeError"


def test_handle_exception_wraps_codec_errors_raised_inside_a_handler():
    """Test an itemmeta error raised while a handler ran is reported against that variant."""
    inner = EncodingError("nested blob unreadable", encoding="binary")
    context = create_error_context(material="CROSSBOW", variant="crossbow", operation="deserialize")

    error = handle_exception(inner, context)

    assert isinstance(error, HandlerError)
    assert error.cause is inner
    assert error.message == "Failed to deserialize crossbow meta: nested blob unreadable"

    assert handle_exception(error, context) is error
