"""Tests for line sources."""

import io
import pathlib

import pytest
from unittest.mock import Mock

from lexstream.character.source import (
    FileLineSource,
    LineSource,
    SourceError,
    as_line_source,
)


class ListLineSource:
    """Minimal in-memory line source."""

    def __init__(self, lines, name=None):
        self._lines = list(lines)
        self.name = name

    @property
    def eof(self):
        return not self._lines

    def read_line(self):
        return self._lines.pop(0) if self._lines else ""


class TestFileLineSource:
    """Test the file object adapter."""

    def test_reads_lines_with_terminators(self):
        """Test that lines keep their terminators."""
        # Arrange
        source = FileLineSource(io.StringIO("a\nbe"))

        # Act & Assert
        assert source.read_line() == "a\n"
        assert source.eof is False
        assert source.read_line() == "be"
        assert source.eof is True

    def test_eof_after_trailing_newline(self):
        """Test that end-of-input is reported once a read comes back empty."""
        # Arrange
        source = FileLineSource(io.StringIO("a\n"))

        # Act
        first = source.read_line()
        eof_after_first = source.eof
        second = source.read_line()

        # Assert
        assert (first, eof_after_first) == ("a\n", False)
        assert (second, source.eof) == ("", True)

    def test_reads_past_end_return_empty(self):
        """Test that reading an exhausted source never touches the file again."""
        # Arrange
        stream = Mock(spec=["readline", "readable", "closed"])
        stream.readline.side_effect = ["x", AssertionError("read after eof")]
        stream.readable.return_value = True
        stream.closed = False
        source = FileLineSource(stream)

        # Act
        source.read_line()

        # Assert
        assert source.read_line() == ""
        assert source.read_line() == ""
        assert stream.readline.call_count == 1

    def test_binary_lines(self):
        """Test that binary files produce bytes lines and bytes at end-of-input."""
        # Arrange
        source = FileLineSource(io.BytesIO(b"ab\n"))

        # Act & Assert
        assert source.read_line() == b"ab\n"
        assert source.read_line() == b""
        assert source.eof is True
        assert source.read_line() == b""

    def test_name_from_path(self, tmp_path):
        """Test that path-like names are reported as strings."""
        # Arrange
        path = tmp_path / "rules.bnf"
        path.write_text("x")

        # Act
        with open(path) as f:
            source = FileLineSource(f)

        # Assert
        assert source.name == str(path)

    def test_name_from_descriptor_is_none(self):
        """Test that integer descriptors do not count as names."""
        stream = io.StringIO("x")
        stream.name = 3

        assert FileLineSource(stream).name is None

    def test_name_from_pathlike_attribute(self):
        """Test that a PathLike name attribute is converted."""
        stream = io.StringIO("x")
        stream.name = pathlib.PurePosixPath("dir/file.txt")

        assert FileLineSource(stream).name == "dir/file.txt"

    def test_rejects_object_without_readline(self):
        """Test that objects without readline are not sources."""
        with pytest.raises(SourceError, match="readline"):
            FileLineSource(object())

    def test_rejects_closed_stream(self):
        """Test that closed streams are rejected."""
        # Arrange
        stream = io.StringIO("x")
        stream.close()

        # Act & Assert
        with pytest.raises(SourceError, match="must be open"):
            FileLineSource(stream)

    def test_rejects_write_only_file(self, tmp_path):
        """Test that write-only files are rejected with their name."""
        # Arrange
        path = tmp_path / "out.txt"

        # Act & Assert
        with open(path, "w") as f:
            with pytest.raises(SourceError, match="must be readable: .*out.txt"):
                FileLineSource(f)

    def test_source_error_is_value_error(self):
        """Test that SourceError can be caught as ValueError."""
        with pytest.raises(ValueError):
            FileLineSource(42)

    def test_io_error_propagates(self):
        """Test that read failures are not masked."""
        # Arrange
        stream = Mock(spec=["readline"])
        stream.readline.side_effect = OSError("unreadable")
        source = FileLineSource(stream)

        # Act & Assert
        with pytest.raises(OSError, match="unreadable"):
            source.read_line()
        assert source.eof is False


class TestAsLineSource:
    """Test line source coercion."""

    def test_line_source_passes_through(self):
        """Test that objects implementing the protocol are returned unchanged."""
        source = ListLineSource(["a\n"], name="mem")

        assert as_line_source(source) is source
        assert isinstance(source, LineSource)

    def test_file_object_is_wrapped(self):
        """Test that file objects are adapted."""
        result = as_line_source(io.StringIO("a"))

        assert isinstance(result, FileLineSource)

    def test_custom_source_drives_stream(self):
        """Test that a custom line source can back a CharStream."""
        # Arrange
        from lexstream.character.stream import CharStream

        stream = CharStream(ListLineSource(["ab\n", "c"], name="mem"))

        # Act
        text = "".join(stream)

        # Assert
        assert text == "ab\nc"
        assert stream.name == "mem"
        assert stream.line == 3
