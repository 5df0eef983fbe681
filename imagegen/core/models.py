"""Core data models shared by every model family."""

import base64
import binascii
from abc import abstractmethod
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from imagegen.core.exceptions import SerializationError


class ImageRequest(BaseModel):
    """Base class for model-specific request bodies.

    Field names are the wire names (snake_case) for every model family, so a
    request serializes the same way regardless of which backend receives it.
    Content rules are checked by validate_request(), which callers invoke
    before dispatch; the transport does not re-validate.
    """

    model_config = ConfigDict(extra="forbid")

    @abstractmethod
    def validate_request(self) -> None:
        """Validate request content.

        Raises:
            RequestValidationError: Naming the first invalid field
        """


class ImageResponse(BaseModel):
    """Base class for model-specific response bodies.

    Unknown fields sent by the service are ignored.
    """

    model_config = ConfigDict(extra="ignore")


def serialize_body(body: BaseModel) -> Dict[str, Any]:
    """Convert a request model into its JSON wire body.

    Args:
        body: Any pydantic model

    Returns:
        JSON-compatible dictionary with unset optional fields omitted
    """
    return body.model_dump(mode="json", exclude_none=True)


def decode_base64_image(data: str) -> bytes:
    """Decode base64 image text returned by a service.

    Args:
        data: Base64 text

    Returns:
        Raw image bytes

    Raises:
        SerializationError: If the text is not valid base64
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SerializationError("Invalid base64 image data") from e
