"""
Tests for enhanced logging configuration.
"""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest
from structlog.testing import capture_logs

from itemmeta.exceptions import ItemMetaError
from itemmeta.structured_logging.enhanced_logging_config import (
    configure_enhanced_structlog,
    get_logger,
    log_exception_once,
    setup_enhanced_logging,
)

pytestmark = pytest.mark.usefixtures("restore_logging")


def test_configure_attaches_stream_handler():
    """Test configuration attaches a handler at the requested level."""
    configure_enhanced_structlog("WARNING")

    package_logger = logging.getLogger("itemmeta")
    assert package_logger.level == logging.WARNING
    assert any(isinstance(handler, logging.StreamHandler) for handler in package_logger.handlers)


def test_configure_disable_logging_uses_null_handler():
    """Test disable_logging silences the package logger."""
    configure_enhanced_structlog("INFO", {"disable_logging": True})

    package_logger = logging.getLogger("itemmeta")
    assert [type(handler) for handler in package_logger.handlers] == [logging.NullHandler]
    assert not package_logger.propagate


def test_configure_writes_log_file(tmp_path: Path):
    """Test an optional log file receives rendered events."""
    log_file = tmp_path / "logs" / "itemmeta.log"
    configure_enhanced_structlog("INFO", {"log_file": str(log_file)})

    get_logger("itemmeta.tests").info("Item codec created", projectiles=b"\x00\x01")
    for handler in logging.getLogger("itemmeta").handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "Item codec created" in content
    assert "<2 bytes>" in content


def test_setup_enhanced_logging_is_idempotent():
    """Test a second setup call is skipped unless forced."""
    setup_enhanced_logging({"logging": {"level": "ERROR"}})
    setup_enhanced_logging({"logging": {"level": "DEBUG"}})

    assert logging.getLogger("itemmeta").level == logging.ERROR

    setup_enhanced_logging({"logging": {"level": "DEBUG"}}, force_reconfigure=True)
    assert logging.getLogger("itemmeta").level == logging.DEBUG


def test_log_exception_once_skips_already_logged_errors():
    """Test errors that logged themselves are not logged again."""
    bound_logger = Mock()
    error = ItemMetaError("already reported")

    log_exception_once(bound_logger, "error", "Codec call failed", exc=error)

    bound_logger.error.assert_not_called()


def test_log_exception_once_marks_plain_exceptions():
    """Test a plain exception is logged once and then marked."""
    error = ValueError("bad colour")

    with capture_logs() as cap_logs:
        log_exception_once(get_logger(__name__), "warning", "Decode failed", exc=error, material="STONE")
        log_exception_once(get_logger(__name__), "warning", "Decode failed", exc=error)

    assert len(cap_logs) == 1
    assert cap_logs[0]["error_type"] == "ValueError"
    assert cap_logs[0]["material"] == "STONE"
