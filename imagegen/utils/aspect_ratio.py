"""Aspect ratio and size-string helpers."""

from typing import Tuple


def _parse_ratio(aspect_ratio: str) -> Tuple[float, float]:
    if not aspect_ratio or not aspect_ratio.strip():
        raise ValueError("Aspect ratio cannot be empty")

    parts = aspect_ratio.split(":")
    if len(parts) != 2:
        raise ValueError("Aspect ratio must be in the format 'width:height'")

    try:
        width_ratio = float(parts[0])
        height_ratio = float(parts[1])
    except ValueError as e:
        raise ValueError(f"Invalid aspect ratio numbers: '{aspect_ratio}'") from e

    if width_ratio <= 0 or height_ratio <= 0:
        raise ValueError("Aspect ratio numbers must be greater than 0")

    return width_ratio, height_ratio


def to_dimensions(aspect_ratio: str, target_width: int) -> Tuple[int, int]:
    """Compute dimensions for an aspect ratio at a given width.

    Args:
        aspect_ratio: Ratio such as "16:9"
        target_width: Desired width in pixels

    Returns:
        Tuple of (width, height), height rounded to the nearest pixel

    Raises:
        ValueError: If the ratio or width is invalid
    """
    if target_width <= 0:
        raise ValueError("Target width must be greater than 0")

    width_ratio, height_ratio = _parse_ratio(aspect_ratio)
    return target_width, round(target_width * (height_ratio / width_ratio))


def to_dimensions_from_height(aspect_ratio: str, target_height: int) -> Tuple[int, int]:
    """Compute dimensions for an aspect ratio at a given height.

    Args:
        aspect_ratio: Ratio such as "16:9"
        target_height: Desired height in pixels

    Returns:
        Tuple of (width, height), width rounded to the nearest pixel

    Raises:
        ValueError: If the ratio or height is invalid
    """
    if target_height <= 0:
        raise ValueError("Target height must be greater than 0")

    width_ratio, height_ratio = _parse_ratio(aspect_ratio)
    return round(target_height * (width_ratio / height_ratio)), target_height


def is_valid_aspect_ratio(aspect_ratio: str) -> bool:
    """Check whether a string is a valid ``width:height`` ratio."""
    try:
        _parse_ratio(aspect_ratio)
    except ValueError:
        return False
    return True


def parse_size(size: str) -> Tuple[int, int]:
    """Parse a ``<width>x<height>`` size string.

    Raises:
        ValueError: If the string is malformed or a side is not positive
    """
    parts = (size or "").split("x")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid size format: '{size}'. Use format like '1024x1024'")

    width, height = int(parts[0]), int(parts[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"Size dimensions must be greater than 0: '{size}'")
    return width, height


def format_size(width: int, height: int) -> str:
    """Format dimensions as a ``<width>x<height>`` size string."""
    if width <= 0 or height <= 0:
        raise ValueError("Dimensions must be greater than 0")
    return f"{width}x{height}"
