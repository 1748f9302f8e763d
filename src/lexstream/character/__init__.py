"""Character layer for lexstream.

This module provides line sources and the cursor-based character stream
built on top of them.
"""

from .source import (
    FileLineSource,
    LexStreamError,
    LineSource,
    SourceError,
    as_line_source,
)
from .stream import (
    CharStream,
    StreamExhaustedError,
    buffer_index,
)

__all__ = [
    # Modules
    "source",
    "stream",
    # Line sources
    "FileLineSource",
    "LineSource",
    "as_line_source",
    # Stream
    "CharStream",
    "buffer_index",
    # Errors
    "LexStreamError",
    "SourceError",
    "StreamExhaustedError",
]
