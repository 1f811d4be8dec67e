"""
Configuration module for the itemmeta codec.

Usage:
    from itemmeta.config import get_config

    config = get_config()
    codec = ItemCodec.from_config(config)
"""

import threading

from .models import CodecConfig, LoggingConfig

__all__ = ["get_config", "reset_config", "CodecConfig", "LoggingConfig"]


class _ConfigState:  # pylint: disable=too-few-public-methods  # Reason: State container class with focused responsibility
    instance: CodecConfig | None = None


_config_state = _ConfigState()
_config_lock = threading.Lock()


def get_config() -> CodecConfig:
    """
    Get the codec configuration, loading it from the environment on first use.

    Returns:
        CodecConfig: The cached configuration

    Raises:
        ValidationError: If configuration values are invalid
    """
    with _config_lock:
        if _config_state.instance is None:
            _config_state.instance = CodecConfig()
        return _config_state.instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    with _config_lock:
        _config_state.instance = None
