"""Shared pieces for Azure OpenAI image deployments (DALL-E 3, GPT-Image-1)."""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, List, Optional

from pydantic import BaseModel

from imagegen.core.base_model import BaseImageModel, ModelOptions
from imagegen.core.exceptions import ConfigurationError, InvalidArgumentError
from imagegen.core.models import ImageResponse, decode_base64_image
from imagegen.core.validation import is_blank

if TYPE_CHECKING:
    from imagegen.core.client import ImageClient
    from imagegen.core.storage import ByteSink

logger = logging.getLogger(__name__)


class DeploymentOptions(ModelOptions):
    """Options for models addressed through a named deployment.

    Attributes:
        deployment_name: Name of the deployment hosting the model
        default_size: Image size used by build_request()
        default_quality: Image quality used by build_request()
    """

    deployment_name: Optional[str] = ""
    default_size: str = "1024x1024"
    default_quality: str = ""

    def validate_identity(self) -> None:
        if is_blank(self.deployment_name):
            raise ConfigurationError("deployment_name", "Deployment name is required")


class ImageData(BaseModel):
    """A single generated image in a response.

    Attributes:
        url: Download URL, present when the response format is "url"
        b64_json: Base64 image data, present when the response format is "b64_json"
        revised_prompt: Prompt actually used by the service
    """

    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None

    @property
    def has_url(self) -> bool:
        return bool(self.url)

    @property
    def has_base64_data(self) -> bool:
        return bool(self.b64_json)

    def get_image_bytes(self) -> bytes:
        """Decode the base64 image data.

        Returns:
            Raw image bytes

        Raises:
            ValueError: If the response carries no base64 data
            SerializationError: If the base64 data is invalid
        """
        if not self.has_base64_data:
            raise ValueError(
                "No base64 image data available. Use read_image_bytes() for URL-based responses."
            )
        return decode_base64_image(self.b64_json)

    async def read_image_bytes(self, client: Optional["ImageClient"] = None) -> bytes:
        """Get the image bytes, decoding base64 data or downloading the URL.

        Args:
            client: Client used for URL downloads (not needed for base64 data)

        Returns:
            Raw image bytes

        Raises:
            InvalidArgumentError: If a download is needed and no client was given
            ValueError: If the response carries no image at all
        """
        if self.has_base64_data:
            return self.get_image_bytes()

        if self.has_url:
            if client is None:
                raise InvalidArgumentError("A client is required for URL-based image download")
            return await client.download_image(self.url)

        raise ValueError("No image data available in response")

    async def save_image(
        self,
        sink: "ByteSink",
        destination: str,
        client: Optional["ImageClient"] = None
    ) -> None:
        """Write the image bytes to a byte sink.

        Args:
            sink: Destination byte sink
            destination: Sink-specific destination (for files, a path)
            client: Client used for URL downloads (not needed for base64 data)
        """
        if is_blank(destination):
            raise InvalidArgumentError("Destination cannot be empty")

        image_bytes = await self.read_image_bytes(client)
        sink.write(destination, image_bytes)
        logger.info(f"Saved image ({len(image_bytes)} bytes) to {destination}")


class ErrorInfo(BaseModel):
    """Error information embedded in a response body."""

    code: str = ""
    message: str = ""

    @property
    def is_content_filtered(self) -> bool:
        """Whether the request was rejected by the content filter."""
        return self.code.lower() == "contentfilter"


class ImageGenerationResponse(ImageResponse):
    """Response body for Azure OpenAI image generation.

    Attributes:
        created: Creation time as unix seconds
        data: Generated images
        error: Error information, if the service reported one
    """

    created: int = 0
    data: List[ImageData] = []
    error: Optional[ErrorInfo] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def created_datetime(self) -> datetime:
        """Creation time as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.created, tz=timezone.utc)


class AzureOpenAIImageModel(BaseImageModel):
    """Base descriptor for models served from an Azure OpenAI deployment."""

    options_class: ClassVar = DeploymentOptions
    response_model: ClassVar = ImageGenerationResponse
    requires_deployment: ClassVar[bool] = True

    @property
    def deployment_name(self) -> str:
        return self._options.deployment_name

    @property
    def default_size(self) -> str:
        return self._options.default_size

    @property
    def default_quality(self) -> str:
        return self._options.default_quality

    @property
    def generation_path(self) -> str:
        return f"openai/deployments/{self.deployment_name}/images/generations"
