"""Image format helpers: file extension and MIME type mapping."""

from typing import Dict


class ImageFormat:
    """Output formats accepted by the supported services."""
    PNG = "PNG"
    JPEG = "JPEG"
    WEBP = "WEBP"


MIME_TYPES: Dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".webp": "image/webp",
    ".tiff": "image/tiff",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}

# Reverse mapping; the last extension listed for a MIME type wins (.jpeg).
EXTENSIONS: Dict[str, str] = {mime: ext for ext, mime in MIME_TYPES.items()}


def _normalize_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def get_mime_type(extension: str) -> str:
    """Get the MIME type for a file extension (with or without the dot).

    Raises:
        ValueError: If the extension is empty or unsupported
    """
    if not extension or not extension.strip():
        raise ValueError("File extension cannot be empty")

    normalized = _normalize_extension(extension)
    if normalized not in MIME_TYPES:
        raise ValueError(f"Unsupported file extension: {normalized}")
    return MIME_TYPES[normalized]


def get_file_extension(mime_type: str) -> str:
    """Get the file extension (with dot) for a MIME type.

    Raises:
        ValueError: If the MIME type is empty or unsupported
    """
    if not mime_type or not mime_type.strip():
        raise ValueError("MIME type cannot be empty")

    extension = EXTENSIONS.get(mime_type.strip().lower())
    if extension is None:
        raise ValueError(f"Unsupported MIME type: {mime_type}")
    return extension


def is_valid_image_format(value: str) -> bool:
    """Check a dotted extension (".png") or a MIME type ("image/png")."""
    if not value or not value.strip():
        return False

    value = value.strip().lower()
    if value.startswith("."):
        return value in MIME_TYPES
    return value in EXTENSIONS


def extension_for_output_format(output_format: str) -> str:
    """Get the file extension for a service output format such as "PNG" or "jpg"."""
    return _normalize_extension("jpg" if output_format.lower() == "jpeg" else output_format)


def get_supported_formats() -> list[str]:
    """Get the supported file extensions."""
    return list(MIME_TYPES)


def get_supported_mime_types() -> list[str]:
    """Get the supported MIME types, without duplicates."""
    return list(dict.fromkeys(MIME_TYPES.values()))
