"""
Enhanced structlog-based logging configuration for itemmeta.

This module is the single entry point for obtaining loggers. Codec modules
call get_logger(__name__) and log structured key/value events; host
applications call setup_enhanced_logging() once with their configuration.
"""

# pylint: disable=too-few-public-methods  # Reason: Logging configuration classes with focused responsibility, minimal public interface

import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, cast

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

from itemmeta.structured_logging.logging_processors import summarize_binary_payloads, truncate_long_text

# NOTE: Infrastructure code may use structlog.get_logger() directly. All other
# modules must use get_logger() from this module.
logger = structlog.get_logger(__name__)

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class _LoggingState:  # pylint: disable=too-few-public-methods  # Reason: State container class with focused responsibility, minimal public interface
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def _strip_ansi_renderer(bound_logger: Any, name: str, event_dict: dict[str, Any]) -> str | bytes:
    """Render key/value output with ANSI escape sequences removed."""
    try:
        formatted = structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])(
            bound_logger, name, event_dict
        )
        return _ANSI_ESCAPE.sub("", formatted)
    except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: A renderer failure must never take the codec call down with it
        return f"Logging renderer error: {type(e).__name__}: {str(e)}"


def configure_enhanced_structlog(
    log_level: str = "INFO",
    log_config: dict[str, Any] | None = None,
) -> None:
    """
    Configure structlog with the itemmeta processor chain.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_config: Logging configuration dictionary (``log_file``, ``disable_logging``)
    """
    log_config = log_config or {}

    base_processors = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        summarize_binary_payloads,
        truncate_long_text,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    _configure_stdlib_handlers(log_level, log_config)

    try:
        structlog.configure(
            processors=base_processors + [_strip_ansi_renderer],
            context_class=dict,
            logger_factory=LoggerFactory(),
            wrapper_class=BoundLogger,
            cache_logger_on_first_use=False,
        )
    except Exception as e:  # pylint: disable=broad-exception-caught  # Reason: structlog.configure can fail for various reasons, and logging must still work afterwards
        logger.warning(
            "Enhanced structlog configuration failed, using basic configuration",
            error=str(e),
            error_type=type(e).__name__,
        )
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                structlog.dev.ConsoleRenderer(),
            ],
            wrapper_class=BoundLogger,
            logger_factory=LoggerFactory(),
        )


def _configure_stdlib_handlers(log_level: str, log_config: dict[str, Any]) -> None:
    """Attach a stream (and optional file) handler to the itemmeta logger tree."""
    package_logger = logging.getLogger("itemmeta")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if log_config.get("disable_logging", False):
        package_logger.addHandler(logging.NullHandler())
        package_logger.setLevel(logging.CRITICAL + 1)
        package_logger.propagate = False
        return

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    package_logger.setLevel(level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(stream_handler)

    log_file = log_config.get("log_file")
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(file_handler)


def setup_enhanced_logging(config: dict[str, Any], *, force_reconfigure: bool = False) -> None:
    """
    Set up logging once per process.

    Args:
        config: Configuration dictionary with an optional ``logging`` section
        force_reconfigure: When True, reconfigure even if already initialized
    """
    config_signature = json.dumps(config, sort_keys=True, default=str)

    if _logging_state.initialized and not force_reconfigure:
        setup_logger = get_logger("itemmeta.structured_logging.setup")
        setup_logger.debug(
            "setup_enhanced_logging skipped; logging system already initialized",
            config_signature=_logging_state.signature,
        )
        return

    logging_config = config.get("logging", {})
    log_level = logging_config.get("level", "INFO")

    configure_enhanced_structlog(log_level, logging_config)

    if not logging_config.get("disable_logging", False):
        setup_logger = get_logger("itemmeta.structured_logging.enhanced")
        setup_logger.info("Enhanced logging system initialized", log_level=log_level)

    _logging_state.initialized = True
    _logging_state.signature = config_signature


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a structlog logger with the specified name.

    This is the public API for obtaining loggers. All application code
    should use this function rather than calling structlog.get_logger()
    directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def log_exception_once(
    bound_logger: BoundLogger,
    level: str,
    message: str,
    *,
    exc: Exception | None = None,
    mark_logged: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log an exception once, respecting exceptions that have already been logged.

    Args:
        bound_logger: Structlog bound logger instance.
        level: Logging level to use (for example, "error" or "warning").
        message: Log message to emit.
        exc: Optional exception to include in the log entry.
        mark_logged: When True, mark the exception as logged to prevent duplicates.
        **kwargs: Additional key-value pairs for structured logging.
    """
    if exc is not None:
        already_logged = getattr(exc, "already_logged", False) or getattr(exc, "_already_logged", False)
        if already_logged:
            return
        kwargs.setdefault("error_type", type(exc).__name__)
        kwargs.setdefault("error", str(exc))

    log_method = getattr(bound_logger, level.lower(), bound_logger.error)
    log_method(message, **kwargs)

    if exc is not None and mark_logged:
        marker = getattr(exc, "mark_logged", None)
        if callable(marker):
            marker()  # pylint: disable=not-callable  # Reason: callable() check confirms marker is callable at runtime
        else:
            cast(Any, exc)._already_logged = True  # pylint: disable=protected-access  # Reason: Part of the exception logging protocol
