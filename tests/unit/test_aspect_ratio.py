"""Unit tests for aspect ratio helpers."""

import pytest

from imagegen.utils.aspect_ratio import (
    format_size,
    is_valid_aspect_ratio,
    parse_size,
    to_dimensions,
    to_dimensions_from_height,
)


class TestToDimensions:
    """Tests for to_dimensions and to_dimensions_from_height."""

    @pytest.mark.parametrize("ratio, width, expected", [
        ("1:1", 1024, (1024, 1024)),
        ("16:9", 1920, (1920, 1080)),
        ("4:3", 1024, (1024, 768)),
        ("9:16", 1080, (1080, 1920)),
    ])
    def test_from_width(self, ratio, width, expected):
        """Test computing height from width."""
        assert to_dimensions(ratio, width) == expected

    def test_from_height(self):
        """Test computing width from height."""
        assert to_dimensions_from_height("16:9", 1080) == (1920, 1080)

    def test_invalid_target(self):
        """Test that non-positive targets are rejected."""
        with pytest.raises(ValueError):
            to_dimensions("16:9", 0)
        with pytest.raises(ValueError):
            to_dimensions_from_height("16:9", -1)

    @pytest.mark.parametrize("ratio", ["", "16", "16:9:1", "a:b", "0:9", "16:-9"])
    def test_invalid_ratio(self, ratio):
        """Test that malformed ratios are rejected."""
        with pytest.raises(ValueError):
            to_dimensions(ratio, 1024)


class TestIsValidAspectRatio:
    """Tests for is_valid_aspect_ratio."""

    def test_valid(self):
        """Test valid ratios."""
        assert is_valid_aspect_ratio("16:9")
        assert is_valid_aspect_ratio("2.39:1")

    def test_invalid(self):
        """Test invalid ratios."""
        assert not is_valid_aspect_ratio("16x9")
        assert not is_valid_aspect_ratio("")


class TestSizeStrings:
    """Tests for parse_size and format_size."""

    def test_parse_size(self):
        """Test parsing a size string."""
        assert parse_size("1792x1024") == (1792, 1024)

    @pytest.mark.parametrize("size", ["", "1024", "1024x", "0x1024", "axb", None])
    def test_parse_size_invalid(self, size):
        """Test that malformed size strings are rejected."""
        with pytest.raises(ValueError):
            parse_size(size)

    def test_format_size(self):
        """Test formatting dimensions."""
        assert format_size(1024, 1536) == "1024x1536"

    def test_format_size_invalid(self):
        """Test that non-positive dimensions are rejected."""
        with pytest.raises(ValueError):
            format_size(0, 1024)
