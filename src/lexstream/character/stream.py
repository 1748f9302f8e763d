"""Character stream with line and column tracking.

``CharStream`` wraps an open line source and hands out one character at a
time through a peek/advance pair: ``front`` returns the character under the
cursor without consuming it, ``pop_front`` moves the cursor on. The stream
holds a single line in memory and reads the next one whenever the cursor
moves past the end of the current line.

Line terminators such as ``\\n`` and ``\\r`` are significant to code-style
analysis, so they stay in the stream as ordinary characters: they occupy a
column on the line they end, and the line number only changes once the
cursor moves past them.

Example:
    >>> import io
    >>> stream = CharStream(io.StringIO("ab\\nc"))
    >>> stream.front, stream.line, stream.column
    ('a', 1, 1)
    >>> "".join(stream)
    'ab\\nc'
"""

import time
from typing import Any, Optional

from lexstream.shared.config import StreamConfig
from lexstream.shared.logging import get_logger
from lexstream.shared.result import StreamMetrics, StreamPosition

from .source import LexStreamError, LineSource, as_line_source


def buffer_index(column: int) -> int:
    """Convert a 1-based text column into a 0-based buffer index.

    Args:
        column: Column number, starting from 1

    Returns:
        The buffer index corresponding to ``column``
    """
    assert column > 0, f"column must be >= 1, got {column}"
    return column - 1


class StreamExhaustedError(LexStreamError, IndexError):
    """Raised when a character is requested from an exhausted stream."""

    def __init__(self, position: StreamPosition) -> None:
        super().__init__(f"no character available at {position}: stream is exhausted")
        self.position = position


class CharStream:
    """Character input stream over a line-oriented source.

    The stream owns the read cursor of its source but not its lifetime:
    whoever opened the source closes it.

    Attributes:
        config: Active stream configuration
    """

    def __init__(self, source: Any, config: Optional[StreamConfig] = None) -> None:
        """Initialize the stream and read the first line.

        An already exhausted source is accepted; the stream then reports
        ``empty`` straight away.

        Args:
            source: A ``LineSource`` or an open, readable file object
            config: Stream configuration, defaults to ``StreamConfig()``

        Raises:
            SourceError: If ``source`` cannot be read from
        """
        self.config = config or StreamConfig()
        self.logger = get_logger(
            __name__,
            self.config.correlation_id,
            "char_stream",
            min_level=self.config.log_level,
        )

        self._source: LineSource = as_line_source(source)
        self._line = 1
        self._column = 1
        self._metrics = StreamMetrics()
        self._exhaustion_logged = False

        self._buffer = self._read_line()
        self.logger.debug(
            "Character stream opened",
            extra={"source_name": self.name, "first_line_length": len(self._buffer)},
        )
        self._check_exhausted()

    def __repr__(self) -> str:
        return f"CharStream(name={self.name!r}, line={self._line}, column={self._column})"

    @property
    def name(self) -> Optional[str]:
        """Name of the underlying source, or None when it has no stable name."""
        return self._source.name

    @property
    def line(self) -> int:
        """Line of the source the cursor is on."""
        return self._line

    @property
    def column(self) -> int:
        """Column of the character at the front of the stream."""
        return self._column

    @property
    def position(self) -> StreamPosition:
        return StreamPosition(self._line, self._column, self.name)

    @property
    def metrics(self) -> StreamMetrics:
        return self._metrics

    @property
    def empty(self) -> bool:
        """True if no more characters can be streamed.

        The source reaching end-of-input is not enough on its own: the last
        line read may still hold characters the cursor has not passed.
        """
        return self._source.eof and buffer_index(self._column) == len(self._buffer)

    @property
    def front(self) -> Any:
        """Peek at the character under the cursor without consuming it.

        Raises:
            StreamExhaustedError: If there is no character at the cursor
        """
        index = buffer_index(self._column)
        if index >= len(self._buffer):
            position = self.position
            self.logger.debug("Read past end of stream", extra={"position": str(position)})
            raise StreamExhaustedError(position)
        return self._buffer[index:index + 1]

    def pop_front(self) -> None:
        """Consume the character under the cursor.

        Moving past the last character of the current line reads the next
        line into the buffer. On an exhausted source the new buffer is empty.
        Advancing a stream that is already empty leaves it unchanged.
        """
        if self.empty:
            return

        if self.config.enable_metrics and buffer_index(self._column) < len(self._buffer):
            self._metrics.characters_consumed += 1

        self._column += 1
        if buffer_index(self._column) >= len(self._buffer):
            self._refill()

    def __iter__(self) -> "CharStream":
        return self

    def __next__(self) -> Any:
        if self.empty:
            raise StopIteration
        char = self.front
        self.pop_front()
        return char

    def _refill(self) -> None:
        self._buffer = self._read_line()
        self._column = 1
        self._line += 1

        if self.config.enable_metrics:
            self._metrics.refills += 1
        if self.config.log_refills:
            self.logger.debug(
                "Buffer refilled",
                extra={"line": self._line, "line_length": len(self._buffer)},
            )
        self._check_exhausted()

    def _read_line(self) -> Any:
        start_time = time.time()
        try:
            line = self._source.read_line()
        except Exception:
            self.logger.error(
                "Failed to read from source",
                extra={"source_name": self.name, "line": self._line},
            )
            raise

        if self.config.enable_metrics:
            self._metrics.processing_time_ms += (time.time() - start_time) * 1000
            if line:
                self._metrics.lines_read += 1
        return line

    def _check_exhausted(self) -> None:
        if self._exhaustion_logged or not self.empty:
            return
        self._exhaustion_logged = True
        self.logger.debug(
            "Character stream exhausted",
            extra={"source_name": self.name, "metrics": self._metrics.to_dict()},
        )
