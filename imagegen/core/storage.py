"""Byte sinks for persisting generated image bytes."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from imagegen.core.exceptions import InvalidArgumentError, StorageError
from imagegen.core.validation import is_blank

logger = logging.getLogger(__name__)


class ByteSink(ABC):
    """Interface for anything that can persist raw bytes under a destination name."""

    @abstractmethod
    def write(self, destination: str, data: bytes) -> None:
        """Write bytes to a destination.

        Args:
            destination: Sink-specific destination identifier
            data: Raw bytes to write

        Raises:
            StorageError: If the write fails
        """
        pass


class FileByteSink(ByteSink):
    """Writes bytes to files, creating parent directories as needed.

    Attributes:
        base_dir: Optional directory that relative destinations are resolved against
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def resolve(self, destination: str) -> Path:
        """Get the file path a destination maps to."""
        path = Path(destination)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    def write(self, destination: str, data: bytes) -> None:
        if is_blank(destination):
            raise InvalidArgumentError("Destination cannot be empty")

        path = self.resolve(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to write image to {path}: {e}")
            raise StorageError(f"Failed to write image to {path}: {e}") from e

        logger.debug(f"Wrote {len(data)} bytes to {path}")
