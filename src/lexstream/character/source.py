"""Readable line sources for character streams.

A line source hands out one line at a time, terminators included, and
reports whether the end of the underlying data has been reached. Reads at or
past the end return an empty line instead of failing.
"""

import os
from typing import Any, AnyStr, Optional, Protocol, Tuple, runtime_checkable


class LexStreamError(Exception):
    """Base exception for lexstream stream errors."""


class SourceError(LexStreamError, ValueError):
    """Raised when an object cannot be used as a line source."""


@runtime_checkable
class LineSource(Protocol):
    """Protocol for objects a ``CharStream`` can read from."""

    @property
    def name(self) -> Optional[str]:
        """Identifying label of the source, or None for anonymous sources."""
        ...

    @property
    def eof(self) -> bool:
        """True once a read has reached the end of the underlying data."""
        ...

    def read_line(self) -> Any:
        """Return the next line, or an empty line at or past end-of-input."""
        ...


_TEXT_TERMINATORS: Tuple[str, ...] = ("\n", "\r")
_BINARY_TERMINATORS: Tuple[bytes, ...] = (b"\n",)


def _source_name(stream: Any) -> Optional[str]:
    """Extract a stable name from a file object.

    Anonymous temporary files report their descriptor number as ``name``;
    those, like objects without a name, have no stable name.
    """
    name = getattr(stream, "name", None)
    if isinstance(name, os.PathLike):
        name = os.fspath(name)
    if isinstance(name, bytes):
        name = os.fsdecode(name)
    return name if isinstance(name, str) else None


class FileLineSource:
    """Line source over a readable Python file object.

    Works with text and binary file objects alike: lines come back as ``str``
    or ``bytes`` depending on what the file's ``readline`` returns.

    Examples:
        >>> import io
        >>> source = FileLineSource(io.StringIO("a\\nb"))
        >>> source.read_line(), source.eof
        ('a\\n', False)
        >>> source.read_line(), source.eof
        ('b', True)
    """

    def __init__(self, stream: Any) -> None:
        """Initialize the line source.

        Args:
            stream: An open, readable file-like object with ``readline``

        Raises:
            SourceError: If ``stream`` is closed, not readable or has no ``readline``
        """
        self._name = _source_name(stream)
        label = f": {self._name}" if self._name else ""

        if not callable(getattr(stream, "readline", None)):
            raise SourceError(f"stream must provide readline(){label}")
        if getattr(stream, "closed", False):
            raise SourceError(f"stream must be open{label}")
        readable = getattr(stream, "readable", None)
        if readable is not None and not readable():
            raise SourceError(f"stream must be readable{label}")

        self._stream = stream
        self._eof = False
        self._empty: Any = ""

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def eof(self) -> bool:
        return self._eof

    def read_line(self) -> AnyStr:
        """Read the next line from the file.

        A line without a trailing terminator can only come from the end of
        the file, so it marks the source as exhausted. Once exhausted, the
        file is not read again.

        Returns:
            The next line with its terminator, or an empty line at end-of-input
        """
        if self._eof:
            return self._empty

        line = self._stream.readline()
        self._empty = line[:0]
        terminators = _BINARY_TERMINATORS if isinstance(line, bytes) else _TEXT_TERMINATORS
        if not line.endswith(terminators):
            self._eof = True
        return line


def as_line_source(obj: Any) -> LineSource:
    """Return ``obj`` if it already is a line source, else wrap it in ``FileLineSource``."""
    if isinstance(obj, LineSource):
        return obj
    return FileLineSource(obj)
