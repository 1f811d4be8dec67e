"""
Exception hierarchy for the itemmeta codec.

Every error raised by the codec carries an ErrorContext naming the material,
variant and operation involved, so a single log line is enough to locate the
item that failed.
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from itemmeta.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """Contextual information for error reporting."""

    material: str | None = None
    variant: str | None = None
    operation: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "material": self.material,
            "variant": self.variant,
            "operation": self.operation,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class ItemMetaError(Exception):
    """
    Base exception for all itemmeta errors.

    The error logs itself once on construction and marks itself as logged so
    that log_exception_once() callers further up do not repeat the entry.
    """

    log_level = "error"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.timestamp = datetime.now()
        self._already_logged = False

        self._log_error()

    @property
    def already_logged(self) -> bool:
        return self._already_logged

    def mark_logged(self) -> None:
        self._already_logged = True

    def _log_error(self) -> None:
        """Log the error with structured context."""
        log_method = getattr(logger, self.log_level, logger.error)
        log_method(
            "itemmeta error occurred",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
            details=self.details,
        )
        self.mark_logged()

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for diagnostics output."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class InvalidItemError(ItemMetaError):
    """An item was constructed with values outside its domain (quantity < 1, ...)."""

    def __init__(self, message: str, context: ErrorContext | None = None, field: str | None = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.field = field
        if field:
            self.details["field"] = field


class UnknownMaterialError(ItemMetaError):
    """The IR names a material the registry cannot resolve."""

    def __init__(self, message: str, context: ErrorContext | None = None, material: Any = None, **kwargs):
        super().__init__(message, context, **kwargs)
        self.material = material
        self.details["material"] = repr(material)


class HandlerError(ItemMetaError):
    """A variant handler failed; only that variant's attributes are lost."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        variant: str = "unknown",
        cause: BaseException | None = None,
        **kwargs,
    ):
        self.variant = variant
        self.cause = cause
        super().__init__(message, context, **kwargs)
        self.details["variant"] = variant
        if cause is not None:
            self.details["cause"] = str(cause)
            self.details["cause_type"] = type(cause).__name__


class EncodingError(ItemMetaError):
    """A text or binary payload could not be encoded or decoded."""

    def __init__(self, message: str, context: ErrorContext | None = None, encoding: str = "unknown", **kwargs):
        super().__init__(message, context, **kwargs)
        self.encoding = encoding
        self.details["encoding"] = encoding


class EncodingShapeError(EncodingError):
    """A decoded payload's top-level value has the wrong shape."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        expected: str | None = None,
        actual: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.expected = expected
        self.actual = actual
        if expected:
            self.details["expected"] = expected
        if actual:
            self.details["actual"] = actual


class RegistryError(ItemMetaError):
    """Registry loading or lookup errors."""

    log_level = "warning"

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        registry: str | None = None,
        key: str | None = None,
        **kwargs,
    ):
        super().__init__(message, context, **kwargs)
        self.registry = registry
        self.key = key
        if registry:
            self.details["registry"] = registry
        if key:
            self.details["key"] = key


def create_error_context(**kwargs) -> ErrorContext:
    """
    Create an error context with the given parameters.

    Args:
        **kwargs: Context parameters

    Returns:
        ErrorContext object
    """
    return ErrorContext(**kwargs)


def handle_exception(exc: Exception, context: ErrorContext | None = None) -> ItemMetaError:
    """
    Convert a generic exception to an itemmeta error.

    An exception raised while a variant handler ran (the context names a
    variant) always becomes a HandlerError so the caller can record it
    against that variant.

    Args:
        exc: The original exception
        context: Error context

    Returns:
        ItemMetaError instance
    """
    if isinstance(exc, HandlerError):
        return exc

    if context is not None and context.variant:
        return HandlerError(
            f"Failed to {context.operation or 'process'} {context.variant} meta: {exc}",
            context,
            variant=context.variant,
            cause=exc,
        )
    if isinstance(exc, ItemMetaError):
        return exc
    if isinstance(exc, ValueError | TypeError | KeyError):
        return InvalidItemError(str(exc), context, details={"original_type": type(exc).__name__})
    return ItemMetaError(
        str(exc), context, details={"original_type": type(exc).__name__, "traceback": traceback.format_exc()}
    )
