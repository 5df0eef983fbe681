"""Unit tests for image format helpers."""

import pytest

from imagegen.utils.image_formats import (
    ImageFormat,
    extension_for_output_format,
    get_file_extension,
    get_mime_type,
    get_supported_formats,
    get_supported_mime_types,
    is_valid_image_format,
)


class TestImageFormat:
    """Tests for ImageFormat constants."""

    def test_formats(self):
        """Test the format constants."""
        assert ImageFormat.PNG == "PNG"
        assert ImageFormat.JPEG == "JPEG"
        assert ImageFormat.WEBP == "WEBP"


class TestMimeTypes:
    """Tests for MIME type mapping."""

    @pytest.mark.parametrize("extension, expected", [
        (".png", "image/png"),
        ("png", "image/png"),
        (".JPG", "image/jpeg"),
        ("jpeg", "image/jpeg"),
        (".webp", "image/webp"),
        (".svg", "image/svg+xml"),
    ])
    def test_get_mime_type(self, extension, expected):
        """Test mapping extensions to MIME types."""
        assert get_mime_type(extension) == expected

    @pytest.mark.parametrize("extension", ["", "  ", ".exe"])
    def test_get_mime_type_invalid(self, extension):
        """Test unsupported or empty extensions."""
        with pytest.raises(ValueError):
            get_mime_type(extension)

    def test_get_file_extension(self):
        """Test mapping MIME types to extensions."""
        assert get_file_extension("image/png") == ".png"
        assert get_file_extension("IMAGE/JPEG") == ".jpeg"

    def test_get_file_extension_invalid(self):
        """Test unsupported or empty MIME types."""
        with pytest.raises(ValueError):
            get_file_extension("application/pdf")
        with pytest.raises(ValueError):
            get_file_extension("")

    def test_is_valid_image_format(self):
        """Test validating extensions and MIME types."""
        assert is_valid_image_format(".png")
        assert is_valid_image_format("image/webp")
        assert not is_valid_image_format(".pdf")
        assert not is_valid_image_format("text/plain")
        assert not is_valid_image_format("")

    @pytest.mark.parametrize("output_format, expected", [
        ("PNG", ".png"),
        ("JPEG", ".jpg"),
        ("jpg", ".jpg"),
        ("webp", ".webp"),
    ])
    def test_extension_for_output_format(self, output_format, expected):
        """Test file extensions for service output formats."""
        assert extension_for_output_format(output_format) == expected

    def test_supported_lists(self):
        """Test the supported extension and MIME type lists."""
        assert ".png" in get_supported_formats()
        mime_types = get_supported_mime_types()
        assert mime_types.count("image/jpeg") == 1
        assert "image/png" in mime_types
