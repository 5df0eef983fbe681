"""Exception hierarchy for image generation clients.

Every failure raised by the library derives from ImageGenError, so callers can
catch one type or branch on the specific failure kind.
"""

import json
from typing import Optional


class ImageGenError(Exception):
    """Base class for all errors raised by imagegen."""


class InvalidArgumentError(ImageGenError, ValueError):
    """A required argument was missing or unusable."""


class ConfigurationError(ImageGenError):
    """A model descriptor option is invalid.

    Attributes:
        field: Name of the first option that failed validation
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class RequestValidationError(ImageGenError, ValueError):
    """A request failed its own validation rules before dispatch.

    Attributes:
        field: Name of the first request field that failed validation
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NetworkError(ImageGenError):
    """Transport-level failure such as DNS resolution or a connection reset."""


class HTTPStatusError(ImageGenError):
    """The service answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code of the response
        response_body: Raw response body text
    """

    def __init__(self, message: str, status_code: int, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body or ""

    @property
    def error_code(self) -> Optional[str]:
        """Service error code from an ``{"error": {"code": ...}}`` body, if any."""
        try:
            payload = json.loads(self.response_body)
        except ValueError:
            return None

        if not isinstance(payload, dict):
            return None
        error = payload.get("error")
        if isinstance(error, dict) and error.get("code") is not None:
            return str(error["code"])
        return None


class ServerError(HTTPStatusError):
    """HTTP status 500 or above. Retried by the transport."""


class ClientError(HTTPStatusError):
    """HTTP status below 500 that is not a success. Never retried."""


class RequestTimeoutError(ImageGenError, TimeoutError):
    """The dispatch deadline elapsed before the call completed.

    Attributes:
        timeout: The configured timeout in seconds
    """

    def __init__(self, timeout: float, message: Optional[str] = None):
        super().__init__(message or f"Request timed out after {timeout}s")
        self.timeout = timeout


class RequestCancelledError(ImageGenError):
    """The caller's cancellation signal fired during dispatch."""


class SerializationError(ImageGenError):
    """A response body was empty or could not be parsed into the expected shape."""


class StorageError(ImageGenError):
    """Writing image bytes to a byte sink failed."""
