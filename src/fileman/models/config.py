"""
Configuration data models for fileman.

This module defines the settings that shape how transfers stream data, how
moves are carried out, and how the command-line front end logs.
"""

from typing import Dict, List, Any
import logging
from pydantic import BaseModel, Field, field_validator


KNOWN_SECTIONS = ('transfer', 'logging')

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class TransferConfig(BaseModel):
    """
    Configuration for copy and move operations.

    Attributes:
        chunk_size: Number of bytes read per step while streaming a file
        prefer_rename: Whether a move first tries an atomic same-filesystem rename
        directory_mode: Permission bits for destination directories created by a file copy
    """

    chunk_size: int = Field(32 * 1024, gt=0, description="Bytes read per step while streaming")
    prefer_rename: bool = Field(False, description="Try os.rename before copy-then-delete on move")
    directory_mode: int = Field(0o777, ge=0, le=0o7777, description="Mode for created destination directories")

    @field_validator('directory_mode', mode='before')
    @classmethod
    def validate_directory_mode(cls, v) -> int:
        """
        Accept octal strings such as '755' or '0o755'.

        A plain integer such as 755 is rejected when its decimal digits spell
        a permission mode, since YAML reads it as decimal 755 (0o1363).
        """
        if isinstance(v, str):
            text = v.strip().lower()
            if text.startswith('0o'):
                text = text[2:]
            try:
                return int(text, 8)
            except ValueError:
                raise ValueError(f"Invalid directory mode: {v}")
        if isinstance(v, int) and 0o777 < v <= 777 and set(str(v)) <= set('01234567'):
            raise ValueError(
                f"Ambiguous directory mode {v}: write it as '{v}' or 0o{v} to mean octal"
            )
        return v

    def get_chunk_size_human_readable(self) -> str:
        """Get chunk size in human-readable format."""
        size = float(self.chunk_size)
        for unit in ['B', 'KB', 'MB']:
            if size < 1024.0:
                return f"{size:.1f} {unit}"
            size /= 1024.0
        return f"{size:.1f} GB"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['directory_mode'] = oct(self.directory_mode)
        return data


class LoggingConfig(BaseModel):
    """
    Configuration for log output.

    Attributes:
        level: Name of the root log level
        format: Format string handed to logging.basicConfig
    """

    level: str = Field("WARNING", description="Root log level")
    format: str = Field("%(asctime)s %(levelname)s %(name)s: %(message)s", description="Log record format")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {list(LOG_LEVELS)}")
        return level

    def get_level_number(self) -> int:
        """Get the numeric level for the logging module."""
        return getattr(logging, self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FileManConfig(BaseModel):
    """
    Main configuration class for fileman.

    Attributes:
        transfer: Copy and move settings
        logging: Log output settings
    """

    transfer: TransferConfig = Field(default_factory=TransferConfig, description="Copy and move settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Log output settings")

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any warnings."""
        warnings = []

        if self.transfer.chunk_size < 4096:
            warnings.append(
                f"Small chunk_size ({self.transfer.chunk_size} bytes) will slow down large copies"
            )

        if self.transfer.chunk_size > 64 * 1024 * 1024:
            warnings.append(
                f"Very large chunk_size ({self.transfer.get_chunk_size_human_readable()}) may cause memory issues"
            )

        if self.transfer.prefer_rename:
            warnings.append("prefer_rename is enabled: same-filesystem moves skip the copy step")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'transfer': self.transfer.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileManConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Chunk size: {self.transfer.get_chunk_size_human_readable()}"]
        parts.append(f"Prefer rename: {self.transfer.prefer_rename}")
        parts.append(f"Log level: {self.logging.level}")

        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    unknown = [key for key in config_data if key not in KNOWN_SECTIONS]
    if unknown:
        raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    for section in KNOWN_SECTIONS:
        value = config_data.get(section)
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"Section '{section}' must be a mapping, got {type(value).__name__}")

    try:
        config = FileManConfig.from_dict(
            {key: value for key, value in config_data.items() if value is not None}
        )
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    return config.model_dump()
