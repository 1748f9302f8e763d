"""Tests for position and metrics objects."""

import pytest

from lexstream.shared.result import StreamMetrics, StreamPosition


class TestStreamPosition:
    """Test the StreamPosition class."""

    def test_str_with_name(self):
        """Test rendering of a named position."""
        assert str(StreamPosition(3, 7, "grammar.bnf")) == "grammar.bnf:3:7"

    def test_str_without_name(self):
        """Test rendering of an anonymous position."""
        assert str(StreamPosition(1, 1)) == "<anonymous>:1:1"

    @pytest.mark.parametrize("line,column", [(0, 1), (1, 0), (-2, 5)])
    def test_invalid_position_raises_error(self, line, column):
        """Test that positions below 1 are rejected."""
        with pytest.raises(ValueError, match="must be >= 1"):
            StreamPosition(line, column)

    def test_positions_are_hashable(self):
        """Test that positions can key dictionaries."""
        positions = {StreamPosition(1, 2, "a"): "x"}

        assert positions[StreamPosition(1, 2, "a")] == "x"


class TestStreamMetrics:
    """Test the StreamMetrics class."""

    def test_defaults(self):
        metrics = StreamMetrics()

        assert metrics.characters_consumed == 0
        assert metrics.characters_per_second == 0.0
        assert metrics.average_line_length == 0.0

    def test_derived_values(self):
        """Test calculated metrics."""
        # Arrange
        metrics = StreamMetrics(
            characters_consumed=1000,
            lines_read=10,
            refills=10,
            processing_time_ms=100.0,
        )

        # Act & Assert
        assert metrics.characters_per_second == 10000.0
        assert metrics.average_line_length == 100.0

    def test_to_dict(self):
        """Test dictionary conversion includes derived values."""
        data = StreamMetrics(characters_consumed=4, lines_read=2).to_dict()

        assert data["characters_consumed"] == 4
        assert data["average_line_length"] == 2.0
        assert data["characters_per_second"] == 0.0
