"""Configuration for lexstream character streams.

Configuration objects are frozen dataclasses: a stream keeps a reference to
the configuration it was created with, and callers derive variants through
``override`` or the preset factory methods.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class StreamConfig:
    """Behaviour switches for a ``CharStream``.

    Attributes:
        enable_metrics: Collect ``StreamMetrics`` while characters are consumed
        log_refills: Emit a debug record for every buffer refill
        diagnostic_level: Level name applied to the stream's logger
        correlation_id: Optional ID attached to every log record of the stream
    """

    enable_metrics: bool = True
    log_refills: bool = False
    diagnostic_level: str = "INFO"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate stream configuration."""
        if not isinstance(self.diagnostic_level, str) or \
                self.diagnostic_level.upper() not in _LEVEL_NAMES:
            raise ConfigValidationError(
                f"diagnostic_level must be one of {', '.join(_LEVEL_NAMES)}, "
                f"got {self.diagnostic_level!r}",
                field_name="diagnostic_level",
                suggestions=[f"Use {name!r}" for name in _LEVEL_NAMES],
            )
        if self.correlation_id is not None and \
                (not isinstance(self.correlation_id, str) or not self.correlation_id):
            raise ConfigValidationError(
                "correlation_id must be a non-empty string or None",
                field_name="correlation_id",
            )

    @property
    def log_level(self) -> int:
        """Numeric ``logging`` level for ``diagnostic_level``."""
        return logging.getLevelName(self.diagnostic_level.upper())

    def override(self, **kwargs: Any) -> "StreamConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = StreamConfig().override(log_refills=True)
        """
        try:
            return replace(self, **kwargs)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StreamConfig":
        """Create configuration from dictionary.

        Raises:
            ConfigValidationError: If ``data`` holds unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=[f"Valid keys: {', '.join(sorted(known))}"],
            )
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "StreamConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "StreamConfig":
        """Create the default configuration: metrics on, quiet refills."""
        return cls()

    @classmethod
    def quiet(cls) -> "StreamConfig":
        """Create configuration with metrics off and warning-level logging."""
        return cls(enable_metrics=False, diagnostic_level="WARNING")

    @classmethod
    def tracing(cls, correlation_id: Optional[str] = None) -> "StreamConfig":
        """Create configuration that logs every refill at debug level."""
        return cls(
            enable_metrics=True,
            log_refills=True,
            diagnostic_level="DEBUG",
            correlation_id=correlation_id,
        )
