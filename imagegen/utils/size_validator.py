"""Dimension checks and scaling helpers."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class SizeConstraints:
    """Optional bounds a size must satisfy.

    Attributes:
        max_width: Maximum width in pixels
        max_height: Maximum height in pixels
        min_width: Minimum width in pixels
        min_height: Minimum height in pixels
        max_aspect_ratio: Maximum width/height ratio
        min_aspect_ratio: Minimum width/height ratio
    """
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    min_width: Optional[int] = None
    min_height: Optional[int] = None
    max_aspect_ratio: Optional[float] = None
    min_aspect_ratio: Optional[float] = None


def is_valid_size(width: int, height: int, max_width: int, max_height: int) -> bool:
    """Check that positive dimensions fit within maximums.

    Raises:
        ValueError: If the maximums are not positive
    """
    if width <= 0 or height <= 0:
        return False

    if max_width <= 0 or max_height <= 0:
        raise ValueError("Maximum dimensions must be greater than 0")

    return width <= max_width and height <= max_height


def is_within_bounds(width: int, height: int, constraints: SizeConstraints) -> bool:
    """Check dimensions against every bound set on the constraints."""
    if width <= 0 or height <= 0:
        return False

    if constraints is None:
        raise ValueError("constraints is required")

    aspect_ratio = width / height
    checks = [
        constraints.max_width is None or width <= constraints.max_width,
        constraints.max_height is None or height <= constraints.max_height,
        constraints.min_width is None or width >= constraints.min_width,
        constraints.min_height is None or height >= constraints.min_height,
        constraints.max_aspect_ratio is None or aspect_ratio <= constraints.max_aspect_ratio,
        constraints.min_aspect_ratio is None or aspect_ratio >= constraints.min_aspect_ratio,
    ]
    return all(checks)


def scale_to_fit(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """Scale down, keeping aspect ratio, until both sides fit the maximums.

    Dimensions that already fit are returned unchanged.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Dimensions must be greater than 0")

    if max_width <= 0 or max_height <= 0:
        raise ValueError("Maximum dimensions must be greater than 0")

    aspect_ratio = width / height
    new_width, new_height = width, height

    if new_width > max_width:
        new_width = max_width
        new_height = round(new_width / aspect_ratio)

    if new_height > max_height:
        new_height = max_height
        new_width = round(new_height * aspect_ratio)

    return new_width, new_height


def scale_to_fill(width: int, height: int, target_width: int, target_height: int) -> Tuple[int, int]:
    """Scale, keeping aspect ratio, so the limiting side matches the target."""
    if width <= 0 or height <= 0:
        raise ValueError("Dimensions must be greater than 0")

    if target_width <= 0 or target_height <= 0:
        raise ValueError("Target dimensions must be greater than 0")

    aspect_ratio = width / height
    target_aspect_ratio = target_width / target_height

    if aspect_ratio > target_aspect_ratio:
        # Wider than target
        return target_width, round(target_width / aspect_ratio)
    return round(target_height * aspect_ratio), target_height
