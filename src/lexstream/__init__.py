"""lexstream.

A character input stream for lexers: wraps an open, line-oriented source and
hands out one character at a time while tracking line and column numbers.
Line terminators are kept in the stream as ordinary characters.
"""

__version__ = "0.1.0"
__author__ = "lexstream developers"

from .character import (
    CharStream,
    FileLineSource,
    LexStreamError,
    LineSource,
    SourceError,
    StreamExhaustedError,
)
from .shared import (
    ConfigError,
    ConfigValidationError,
    StreamConfig,
    StreamMetrics,
    StreamPosition,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Streams and sources
    "CharStream",
    "FileLineSource",
    "LineSource",

    # Results and configuration
    "StreamConfig",
    "StreamMetrics",
    "StreamPosition",

    # Errors
    "ConfigError",
    "ConfigValidationError",
    "LexStreamError",
    "SourceError",
    "StreamExhaustedError",
]
