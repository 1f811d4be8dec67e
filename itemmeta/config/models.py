"""
Pydantic-based configuration models for the itemmeta codec.

Settings are read from the environment (and an optional .env file) so a host
application can pin the engine version it talks to without code changes.
"""

import re
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

_VERSION_PATTERN = re.compile(r"^\d+\.\d+(\.\d+)?$")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    log_file: str | None = Field(default=None, description="Optional file to mirror log output into")
    disable_logging: bool = Field(default=False, description="Disable all logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    model_config = {"env_prefix": "ITEMMETA_LOGGING_", "case_sensitive": False, "extra": "ignore"}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the dictionary shape setup_enhanced_logging() expects."""
        return {
            "level": self.level,
            "log_file": self.log_file,
            "disable_logging": self.disable_logging,
        }


class CodecConfig(BaseSettings):
    """
    Composite codec configuration.

    Access via get_config(); pass to ItemCodec.from_config().
    """

    server_version: str = Field(
        default="1.21.4",
        description="Host engine version (major.minor[.patch]) used for capability gating",
    )
    registry_path: Path | None = Field(
        default=None,
        description="Directory of registry JSON files; bundled data is used when unset",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "ITEMMETA_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("server_version")
    @classmethod
    def validate_server_version(cls, v: str) -> str:
        """Validate the version string is numeric major.minor[.patch]."""
        v = v.strip()
        if not _VERSION_PATTERN.match(v):
            logger.error("Invalid server version", server_version=v)
            raise ValueError(f"server_version must look like '1.21' or '1.21.4', got '{v}'")
        return v

    @field_validator("registry_path")
    @classmethod
    def validate_registry_path(cls, v: Path | None) -> Path | None:
        """Registry directory must exist when given."""
        if v is not None and not v.is_dir():
            raise ValueError(f"registry_path must be an existing directory, got '{v}'")
        return v
