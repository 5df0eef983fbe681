"""Small predicates shared by option and request validation."""

import math
from typing import Any, Iterable, Optional
from urllib.parse import urlsplit


def is_blank(value: Optional[str]) -> bool:
    """Return True for None, empty or whitespace-only strings."""
    return value is None or not str(value).strip()


def matches_choice(value: Optional[str], choices: Iterable[str]) -> bool:
    """Check a value against an enumeration, ignoring case."""
    if is_blank(value):
        return False
    return value.lower() in {choice.lower() for choice in choices}


def is_absolute_uri(value: Optional[str]) -> bool:
    """Check that a value is a well-formed absolute http(s) URI."""
    if is_blank(value) or any(char.isspace() for char in value):
        return False

    try:
        parts = urlsplit(value)
        # Raises ValueError for a non-numeric or out-of-range port
        parts.port
    except ValueError:
        return False

    return parts.scheme in ("http", "https") and bool(parts.hostname)


def is_dimension_string(value: Optional[str]) -> bool:
    """Check a ``<width>x<height>`` string with positive integer sides."""
    if is_blank(value):
        return False

    parts = value.split("x")
    if len(parts) != 2:
        return False

    width, height = parts
    if not (width.isdigit() and height.isdigit()):
        return False

    return int(width) > 0 and int(height) > 0


def is_finite_number(value: Any) -> bool:
    """Check for a real, finite int or float. Booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
