"""Shared utilities for lexstream.

This module provides configuration objects, result types and logging helpers
used by the character and tools layers.
"""

from .result import (
    StreamMetrics,
    StreamPosition,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    StreamConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "StreamMetrics",
    "StreamPosition",
    "ConfigError",
    "ConfigValidationError",
    "StreamConfig",
    "CorrelationLogger",
    "get_logger",
]
