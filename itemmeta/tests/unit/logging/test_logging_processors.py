"""
Unit tests for the itemmeta structlog processors.
"""

from itemmeta.structured_logging.logging_processors import (
    MAX_LOGGED_TEXT_LENGTH,
    summarize_binary_payloads,
    truncate_long_text,
)


def test_summarize_binary_payloads_replaces_bytes():
    """Test bytes at any depth are replaced by a size marker."""
    event_dict = {
        "event": "Serializing item",
        "projectiles": b"\x00" * 12,
        "item_data": {"nested": [b"ab", {"deep": bytearray(b"xyz")}], "name": "kept"},
    }

    result = summarize_binary_payloads(None, "info", event_dict)

    assert result["projectiles"] == "<12 bytes>"
    assert result["item_data"] == {"nested": ["<2 bytes>", {"deep": "<3 bytes>"}], "name": "kept"}
    assert result["event"] == "Serializing item"


def test_truncate_long_text_clips_values_but_not_event():
    """Test long strings are shortened while the event message is left alone."""
    long_text = "x" * (MAX_LOGGED_TEXT_LENGTH + 50)
    event_dict = {"event": long_text, "name": long_text, "short": "ok"}

    result = truncate_long_text(None, "info", event_dict)

    assert result["event"] == long_text
    assert len(result["name"]) < len(long_text)
    assert result["name"].startswith("x" * MAX_LOGGED_TEXT_LENGTH)
    assert result["short"] == "ok"
