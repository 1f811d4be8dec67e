"""
Logging processors for structlog event processing.

Item payloads routinely carry raw byte blobs (nested crossbow projectiles,
BYTE_ARRAY tags) and long JSON text components. These processors keep such
values readable in log output.
"""

from typing import Any

MAX_LOGGED_TEXT_LENGTH = 256


def summarize_binary_payloads(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Replace raw byte values with a short size marker.

    Args:
        _logger: Logger instance (unused)
        _name: Logger name (unused)
        event_dict: Event dictionary to process

    Returns:
        Event dictionary with bytes values summarised
    """

    def summarize(value: Any) -> Any:
        if isinstance(value, bytes | bytearray):
            return f"<{len(value)} bytes>"
        if isinstance(value, dict):
            return {key: summarize(inner) for key, inner in value.items()}
        if isinstance(value, list):
            return [summarize(inner) for inner in value]
        return value

    return {key: summarize(value) for key, value in event_dict.items()}


def truncate_long_text(_logger: Any, _name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Clip oversized string fields (serialized components, YAML documents)."""
    for key, value in event_dict.items():
        if key == "event":
            continue
        if isinstance(value, str) and len(value) > MAX_LOGGED_TEXT_LENGTH:
            event_dict[key] = value[:MAX_LOGGED_TEXT_LENGTH] + f"...(+{len(value) - MAX_LOGGED_TEXT_LENGTH} chars)"
    return event_dict
