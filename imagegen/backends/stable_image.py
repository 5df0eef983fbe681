"""Stable Image Core and Stable Image Ultra descriptors, requests and responses.

Both models are served from an Azure AI model endpoint and share one payload
shape; they differ only in model name.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional, Type

from pydantic import BaseModel

from imagegen.core.base_model import BaseImageModel, ModelOptions
from imagegen.core.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    RequestValidationError,
)
from imagegen.core.models import ImageRequest, ImageResponse, decode_base64_image
from imagegen.core.validation import is_blank, is_dimension_string, matches_choice

if TYPE_CHECKING:
    from imagegen.core.client import ImageClient
    from imagegen.core.storage import ByteSink

logger = logging.getLogger(__name__)

SUPPORTED_OUTPUT_FORMATS = ("png", "jpg", "jpeg", "webp")


class StableImageOptions(ModelOptions):
    """Configuration options shared by the Stable Image models.

    Attributes:
        default_size: Image size (``<width>x<height>``) used by build_request()
        default_output_format: Output format used by build_request()
    """

    api_version: str = "2024-05-01-preview"
    default_size: str = "1024x1024"
    default_output_format: str = "png"

    def validate_defaults(self) -> None:
        if not is_dimension_string(self.default_size):
            raise ConfigurationError(
                "default_size", "Default size must be in format like '1024x1024'"
            )

        if not matches_choice(self.default_output_format, SUPPORTED_OUTPUT_FORMATS):
            raise ConfigurationError(
                "default_output_format",
                f"Default output format must be one of: {', '.join(SUPPORTED_OUTPUT_FORMATS)}"
            )


class StableImageCoreOptions(StableImageOptions):
    model_name: Optional[str] = "Stable-Image-Core"


class StableImageUltraOptions(StableImageOptions):
    model_name: Optional[str] = "Stable-Image-Ultra"


class StableImageRequest(ImageRequest):
    """Request body for Stable Image generation.

    Attributes:
        model: Model identifier sent to the service
        prompt: Text prompt for the image
        negative_prompt: What to avoid in the image
        size: ``<width>x<height>`` with positive integers
        output_format: "png", "jpg", "jpeg" or "webp"
        seed: Non-negative seed for reproducibility
    """

    model: str = ""
    prompt: str = ""
    negative_prompt: Optional[str] = None
    size: str = "1024x1024"
    output_format: str = "png"
    seed: Optional[int] = None

    def validate_request(self) -> None:
        if is_blank(self.model):
            raise RequestValidationError("model", "Model is required")

        if is_blank(self.prompt):
            raise RequestValidationError("prompt", "Prompt is required")

        if not is_dimension_string(self.size):
            raise RequestValidationError(
                "size", "Invalid size format. Use format like '1024x1024'"
            )

        if not matches_choice(self.output_format, SUPPORTED_OUTPUT_FORMATS):
            raise RequestValidationError(
                "output_format",
                f"Invalid output format. Supported formats: {', '.join(SUPPORTED_OUTPUT_FORMATS)}"
            )

        if self.seed is not None and self.seed < 0:
            raise RequestValidationError("seed", "Seed must be non-negative")


class StableImageCoreRequest(StableImageRequest):
    model: str = "Stable-Image-Core"


class StableImageUltraRequest(StableImageRequest):
    model: str = "Stable-Image-Ultra"


class ImageMetadata(BaseModel):
    """Metadata the service reports about a generated image."""

    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    seed: Optional[int] = None
    model: Optional[str] = None


class StableImageResponse(ImageResponse):
    """Response body for Stable Image generation.

    Attributes:
        image: Base64-encoded image data
        metadata: Optional details about the generated image
    """

    image: str = ""
    metadata: Optional[ImageMetadata] = None

    @property
    def has_image(self) -> bool:
        return bool(self.image)

    def get_image_bytes(self) -> bytes:
        """Decode the base64 image data.

        Raises:
            ValueError: If the response carries no image
            SerializationError: If the base64 data is invalid
        """
        if not self.has_image:
            raise ValueError("No image data available")
        return decode_base64_image(self.image)

    async def save_image(
        self,
        sink: "ByteSink",
        destination: str,
        client: Optional["ImageClient"] = None
    ) -> None:
        """Write the decoded image to a byte sink.

        Args:
            sink: Destination byte sink
            destination: Sink-specific destination (for files, a path)
            client: Unused; Stable Image responses always carry base64 data
        """
        if is_blank(destination):
            raise InvalidArgumentError("Destination cannot be empty")

        image_bytes = self.get_image_bytes()
        sink.write(destination, image_bytes)
        logger.info(f"Saved image ({len(image_bytes)} bytes) to {destination}")


class StableImageModel(BaseImageModel):
    """Base descriptor for the Stable Image models."""

    options_class: ClassVar = StableImageOptions
    response_model: ClassVar = StableImageResponse
    request_class: ClassVar[Type[StableImageRequest]] = StableImageRequest

    @property
    def default_size(self) -> str:
        return self._options.default_size

    @property
    def default_output_format(self) -> str:
        return self._options.default_output_format

    @property
    def generation_path(self) -> str:
        return "images/generations"

    @classmethod
    def create(
        cls,
        endpoint: str,
        api_key: str,
        configure: Optional[Callable[[StableImageOptions], None]] = None
    ):
        """Create a Stable Image descriptor.

        Args:
            endpoint: Azure AI model endpoint
            api_key: API key
            configure: Optional callback adjusting the options before validation

        Returns:
            A validated descriptor of the calling class

        Raises:
            ConfigurationError: If any option is invalid
        """
        options = cls.options_class(endpoint=endpoint, api_key=api_key)
        return cls.from_options(options, configure)

    def build_request(self, prompt: str, **overrides: Any) -> StableImageRequest:
        values = {
            "model": self.model_name,
            "prompt": prompt,
            "size": self.default_size,
            "output_format": self.default_output_format,
        }
        values.update(overrides)
        return self.request_class(**values)


class StableImageCoreModel(StableImageModel):
    """Stable Image Core descriptor."""

    family: ClassVar[str] = "stable-image-core"
    options_class: ClassVar = StableImageCoreOptions
    request_class: ClassVar = StableImageCoreRequest


class StableImageUltraModel(StableImageModel):
    """Stable Image Ultra descriptor."""

    family: ClassVar[str] = "stable-image-ultra"
    options_class: ClassVar = StableImageUltraOptions
    request_class: ClassVar = StableImageUltraRequest
